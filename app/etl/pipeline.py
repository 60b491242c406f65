from pathlib import Path
from typing import Any

import polars as pl


class FacultyExtractor:
    """Reads faculty rows from structured source files.

    JSON files hold an array of nested records. CSV files are flat: nested
    values use dotted column names (e.g. `experience.teaching`) and every
    cell is read as text so Pydantic does the type coercion.
    """

    @staticmethod
    def read_json(file_path: Path) -> pl.DataFrame:
        """Reads a JSON array of records into a Polars DataFrame."""
        return pl.read_json(file_path)

    @staticmethod
    def read_csv(file_path: Path) -> pl.DataFrame:
        """Reads a CSV file into a Polars DataFrame with all columns as strings."""
        return pl.read_csv(file_path, infer_schema_length=0)

    @classmethod
    def extract(cls, file_path: Path) -> pl.DataFrame:
        suffix = file_path.suffix.lower()
        if suffix == ".json":
            return cls.read_json(file_path)
        if suffix == ".csv":
            return cls.read_csv(file_path)
        raise ValueError(f"Unsupported faculty source format: {file_path.name}")


class FacultyRowTransformer:
    """Turns extracted rows into payloads for FacultyService.create_faculty."""

    QUALIFICATION_SEPARATOR = ";"

    @classmethod
    def to_payloads(cls, df: pl.DataFrame) -> list[dict[str, Any]]:
        return [cls.unflatten(row) for row in df.to_dicts()]

    @classmethod
    def unflatten(cls, row: dict[str, Any]) -> dict[str, Any]:
        """Expands dotted keys into nested dicts and drops empty cells.

        Example:
            {"experience.teaching": "5", "qualifications": "Ph.D; M.Tech"}
            -> {"experience": {"teaching": "5"}, "qualifications": ["Ph.D", "M.Tech"]}
        """
        payload: dict[str, Any] = {}
        for key, value in row.items():
            value = cls._drop_nulls(value)
            if value is None or value == "":
                continue
            if key == "qualifications" and isinstance(value, str):
                value = [q.strip() for q in value.split(cls.QUALIFICATION_SEPARATOR) if q.strip()]

            *parents, leaf = key.split(".")
            target = payload
            for parent in parents:
                target = target.setdefault(parent, {})
            target[leaf] = value
        return payload

    @classmethod
    def _drop_nulls(cls, value: Any) -> Any:
        """Polars fills missing struct fields with None; remove them so defaults apply."""
        if isinstance(value, dict):
            cleaned = {k: cls._drop_nulls(v) for k, v in value.items()}
            cleaned = {k: v for k, v in cleaned.items() if v is not None}
            return cleaned or None
        return value
