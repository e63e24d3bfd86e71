"""Load and validate search performance CSV exports."""

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger

from .constants import CSV_SUFFIX, MAX_UPLOAD_BYTES, REQUIRED_COLUMNS, LogMessage
from .exceptions import DatasetRejectedError
from .normalize import is_blank, normalize_rows
from .sanitizer import validate_content


class DatasetLoader:
    """Reads CSV exports into rows and refuses datasets that cannot be analyzed.

    A dataset is rejected when the file is not a CSV file or too large, when
    it holds no rows, when a required column is absent or completely empty,
    or when any cell looks like executable content.

    Attributes:
        required_columns: Columns every dataset must provide.
        max_bytes: Largest accepted file size.
    """

    def __init__(
        self,
        *,
        required_columns: Sequence[str] = REQUIRED_COLUMNS,
        max_bytes: int = MAX_UPLOAD_BYTES,
    ):
        self.required_columns = tuple(required_columns)
        self.max_bytes = max_bytes

    def load(self, *, filepath: Path | str) -> list[dict[str, Any]]:
        """Read and validate a CSV file.

        Args:
            filepath: Path to the CSV export.

        Returns:
            list[dict[str, Any]]: Rows with lower-cased keys; empty cells are None.

        Raises:
            DatasetRejectedError: If the file or its content is not acceptable.
        """
        filepath = Path(filepath)
        logger.info(LogMessage.LOADING_FILE.format(filepath))

        if filepath.suffix.lower() != CSV_SUFFIX:
            raise DatasetRejectedError("Please select a CSV file")
        if not filepath.is_file():
            raise DatasetRejectedError(f"File not found: {filepath}")
        if filepath.stat().st_size > self.max_bytes:
            raise DatasetRejectedError(
                f"File size exceeds {self.max_bytes // (1024 * 1024)}MB limit"
            )

        try:
            df = pd.read_csv(
                filepath,
                skip_blank_lines=True,
                keep_default_na=False,
                na_values=[""],
            )
        except pd.errors.EmptyDataError:
            raise DatasetRejectedError("CSV is empty or contains no data") from None
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DatasetRejectedError(f"Error parsing CSV: {e}") from e

        records = df.astype(object).where(df.notna(), None).to_dict(orient="records")
        logger.info(LogMessage.LOADED_ROWS.format(len(records), ", ".join(map(str, df.columns))))
        return self.load_records(records=records, columns=list(df.columns))

    def load_records(
        self,
        *,
        records: Sequence[Mapping[Any, Any]],
        columns: Sequence[Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Validate already-decoded records.

        Args:
            records: Decoded rows, keys in any case.
            columns: Header of the source, when known; otherwise taken from the rows.

        Returns:
            list[dict[str, Any]]: Rows with lower-cased keys.

        Raises:
            DatasetRejectedError: If the records cannot be analyzed.
        """
        if not records:
            raise DatasetRejectedError("CSV is empty or contains no data")

        rows = normalize_rows(records)
        if columns is None:
            actual = {key for row in rows for key in row}
        else:
            actual = {str(column).lower() for column in columns}

        missing = [column for column in self.required_columns if column not in actual]
        if missing:
            raise DatasetRejectedError(
                f"CSV is missing required columns: {', '.join(missing)}"
            )

        empty = [
            column
            for column in self.required_columns
            if all(is_blank(row.get(column)) for row in rows)
        ]
        if empty:
            raise DatasetRejectedError(
                f"The following columns are completely empty: {', '.join(empty)}"
            )

        validate_content(rows)
        return rows
