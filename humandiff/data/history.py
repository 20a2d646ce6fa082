"""Parquet-backed transformation history.

Each completed transformation is stored as one row so it can be listed,
restored into the editor, or deleted later.
"""

import logging
import os
import tempfile
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Optional

import polars as pl

from humandiff.rewrite.settings import EPOCH, TransformationResponse

logger = logging.getLogger(__name__)


class HistoryStore:
    """Manages the history parquet file."""

    SCHEMA = {
        "id": pl.String,
        "original_text": pl.String,
        "humanized_text": pl.String,
        "mode": pl.String,
        "formality": pl.Int64,
        "target_audience": pl.String,
        "verbosity": pl.String,
        "deep_humanization": pl.Boolean,
        "created_at": pl.Datetime("ms", "UTC"),
    }

    def __init__(self, filepath: str = "datasets/history.parquet"):
        self.filepath = Path(filepath)
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

        if not self.filepath.exists():
            self._create_empty()

    def _create_empty(self) -> None:
        """Create empty parquet with correct schema."""
        self._write(pl.DataFrame(schema=self.SCHEMA))

    def _read(self) -> pl.DataFrame:
        return pl.read_parquet(self.filepath)

    def _write(self, df: pl.DataFrame) -> None:
        """Write to a sibling temp file and swap it in, so readers never see a partial file."""
        fd, tmp = tempfile.mkstemp(dir=self.filepath.parent, suffix=".parquet.tmp")
        os.close(fd)
        try:
            df.write_parquet(tmp)
            os.replace(tmp, self.filepath)
        except BaseException:
            os.unlink(tmp)
            raise

    def read(self) -> pl.DataFrame:
        """Read the entire history."""
        with self._lock:
            return self._read()

    def append(self, response: TransformationResponse) -> str:
        """Append a completed transformation. Returns its ID.

        Raises:
            ValueError: If either text is blank or the ID already exists
        """
        for field, value in [
            ("id", response.id),
            ("original_text", response.original_text),
            ("humanized_text", response.humanized_text),
        ]:
            if not value or not value.strip():
                raise ValueError(f"{field} cannot be empty")

        new_row = pl.DataFrame(
            {
                "id": [response.id],
                "original_text": [response.original_text],
                "humanized_text": [response.humanized_text],
                "mode": [response.mode.value],
                "formality": [response.formality],
                "target_audience": [response.target_audience.value],
                "verbosity": [response.verbosity.value],
                "deep_humanization": [response.deep_humanization],
                "created_at": [response.created_at],
            },
            schema=self.SCHEMA,
        )

        with self._lock:
            existing_df = self._read()
            if response.id in existing_df["id"].to_list():
                raise ValueError(f"ID '{response.id}' already exists in history")

            updated = pl.concat([existing_df, new_row])
            self._write(updated)

        logger.info(f"Stored transformation {response.id} ({len(updated)} in history)")
        return response.id

    def list(self, limit: Optional[int] = None) -> List[TransformationResponse]:
        """Return stored transformations, newest first.

        Args:
            limit: Maximum number of records to return

        Returns:
            List of TransformationResponse records
        """
        # Reversed first so that ties keep the most recently appended row on top.
        df = self.read().reverse().sort("created_at", descending=True, maintain_order=True)
        if limit is not None:
            df = df.head(limit)
        return [self._to_response(row) for row in df.iter_rows(named=True)]

    def get(self, id: str) -> TransformationResponse:
        """Return a single transformation.

        Raises:
            KeyError: If no record has this ID
        """
        df = self.read().filter(pl.col("id") == id)
        if df.is_empty():
            raise KeyError(id)
        return self._to_response(df.row(0, named=True))

    def delete(self, id: str) -> bool:
        """Delete a transformation. Returns True if a record was removed."""
        with self._lock:
            existing_df = self._read()
            remaining = existing_df.filter(pl.col("id") != id)
            if len(remaining) == len(existing_df):
                return False
            self._write(remaining)

        logger.info(f"Deleted transformation {id}")
        return True

    @staticmethod
    def _to_response(row: dict) -> TransformationResponse:
        created_at: datetime = row["created_at"]
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return TransformationResponse(
            id=row["id"],
            original_text=row["original_text"],
            humanized_text=row["humanized_text"],
            mode=row["mode"],
            formality=row["formality"],
            target_audience=row["target_audience"],
            verbosity=row["verbosity"],
            deep_humanization=row["deep_humanization"],
            timestamp=(created_at - EPOCH) // timedelta(milliseconds=1),
        )
