"""URL path and language segmentation."""

from collections.abc import Iterable
from urllib.parse import urlsplit

from loguru import logger

from ..constants import (
    HOMEPAGE_PATH,
    INVALID_PATH,
    LANGUAGE_CODES,
    UNKNOWN_LANGUAGE,
    LogMessage,
)
from ..models import Segment

# Characters a hostname can never contain
_INVALID_HOST_CHARS = frozenset(' \t\n<>"{}|\\^`')


class PathLanguageSegmenter:
    """Splits landing page paths into a language code and a content path.

    Attributes:
        language_codes: Lower-cased language codes recognized as path segments.
    """

    def __init__(self, *, language_codes: Iterable[str] = LANGUAGE_CODES):
        self.language_codes = frozenset(code.lower() for code in language_codes)

    def segment(self, pathname: str) -> Segment:
        """Segment a URL path.

        The first segment that is a known language code becomes the language;
        every other segment is part of the path.

        Args:
            pathname: Path component of a URL, e.g. ``/de/blog/post``.

        Returns:
            Segment: Language code plus full and primary path.
        """
        lang = UNKNOWN_LANGUAGE
        remaining: list[str] = []

        for part in (p for p in pathname.split("/") if p):
            if lang == UNKNOWN_LANGUAGE and part.lower() in self.language_codes:
                lang = part.lower()
            else:
                remaining.append(part)

        if not remaining:
            return Segment(lang=lang, path=HOMEPAGE_PATH, primary_path=HOMEPAGE_PATH)
        return Segment(
            lang=lang,
            path="/" + "/".join(remaining),
            primary_path="/" + remaining[0],
        )

    def segment_url(self, page: object, *, row_index: int | None = None) -> Segment:
        """Segment a landing page given as a URL or a scheme-less URL-like string.

        Values that cannot be read as a URL map to the ``/invalid`` path.

        Args:
            page: Landing page value from the dataset.
            row_index: Index of the row, used when logging invalid URLs.

        Returns:
            Segment: Segmentation of the URL path.
        """
        try:
            pathname = parse_pathname(str(page))
        except ValueError as e:
            logger.warning(LogMessage.INVALID_URL.format(row_index, f"{page} ({e})"))
            return Segment(lang=UNKNOWN_LANGUAGE, path=INVALID_PATH, primary_path=INVALID_PATH)
        return self.segment(pathname)


def parse_pathname(page: str) -> str:
    """Return the path of ``page``, prefixing ``https://`` when it has no scheme.

    Raises:
        ValueError: If the value cannot be interpreted as a URL.
    """
    candidate = page if page.startswith("http") else f"https://{page}"
    parts = urlsplit(candidate)
    # Accessing the port validates it
    parts.port
    if not parts.scheme or not parts.hostname:
        raise ValueError("missing host")
    if _INVALID_HOST_CHARS.intersection(parts.hostname):
        raise ValueError("invalid host")
    return parts.path or "/"
