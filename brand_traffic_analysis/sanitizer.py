"""Guards applied where data enters or leaves the system."""

from collections.abc import Iterable, Mapping
from typing import Any

from .constants import FORMULA_NEUTRALIZER, FORMULA_PREFIXES, SUSPICIOUS_CONTENT_MARKERS
from .exceptions import DatasetRejectedError

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)


def sanitize_cell(value: Any) -> Any:
    """Neutralize spreadsheet formulas in a delimited-text export cell.

    Text starting with ``=``, ``+``, ``-`` or ``@`` is prefixed with an
    apostrophe; anything that is not text is returned unchanged.
    """
    if isinstance(value, str) and value.startswith(FORMULA_PREFIXES):
        return f"{FORMULA_NEUTRALIZER}{value}"
    return value


def sanitize_html(value: Any) -> str:
    """Escape a value for insertion into HTML markup."""
    if value is None:
        return ""
    return str(value).translate(_HTML_ESCAPES)


def validate_content(rows: Iterable[Mapping[str, Any]]) -> None:
    """Reject a dataset containing markers of executable content.

    Args:
        rows: Dataset rows; every cell is checked.

    Raises:
        DatasetRejectedError: On the first cell containing a suspicious marker.
    """
    for index, row in enumerate(rows):
        for key, value in row.items():
            text = str(value or "").lower()
            for marker in SUSPICIOUS_CONTENT_MARKERS:
                if marker in text:
                    raise DatasetRejectedError(
                        f"Suspicious content detected in CSV file (row {index}, column "
                        f"'{key}', e.g. data like: {str(value)[:50]}...)."
                    )
