from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # Database Connection
    DATABASE_URL: str = "sqlite:///./faculty_registry.db"
    DATABASE_ECHO: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"

    # Directory listing
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Sample data
    SEED_ON_STARTUP: bool = False
    SEED_FILE: str | None = None

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8000

    class Config:
        env_file = ".env"

settings = Settings()
