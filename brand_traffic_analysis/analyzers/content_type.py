"""Landing page content type inference."""

from collections import OrderedDict
from urllib.parse import urlsplit

from ..constants import CONTENT_TYPE_RULES, HOMEPAGE_PATHS, ContentType


class ContentTypeCache:
    """URL to content type memo, optionally bounded as an LRU.

    Attributes:
        max_size: Maximum number of cached URLs, or None for no limit.
    """

    def __init__(self, *, max_size: int | None = None):
        self.max_size = max_size
        self._entries: OrderedDict[str, ContentType] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, url: str) -> ContentType | None:
        content_type = self._entries.get(url)
        if content_type is not None and self.max_size is not None:
            self._entries.move_to_end(url)
        return content_type

    def put(self, url: str, content_type: ContentType) -> None:
        self._entries[url] = content_type
        if self.max_size is not None and len(self._entries) > self.max_size:
            self._entries.popitem(last=False)


class ContentTypeClassifier:
    """Maps landing page URLs to coarse content types.

    Rules are checked in order against the lower-cased URL and the first
    matching substring wins. URLs whose path is empty or the site root are
    homepages; anything else is ``Other``.
    """

    def __init__(self, *, cache: ContentTypeCache | None = None):
        self.cache = cache if cache is not None else ContentTypeCache()

    def classify(self, url: str | None) -> ContentType:
        if not url:
            return ContentType.UNKNOWN

        cached = self.cache.get(url)
        if cached is not None:
            return cached

        content_type = _infer(url)
        self.cache.put(url, content_type)
        return content_type


def _infer(url: str) -> ContentType:
    normalized = url.lower()
    for patterns, content_type in CONTENT_TYPE_RULES:
        if any(pattern in normalized for pattern in patterns):
            return content_type

    if _path_of(normalized) in HOMEPAGE_PATHS:
        return ContentType.HOMEPAGE
    return ContentType.OTHER


def _path_of(url: str) -> str:
    # Bare paths such as "/blog" are kept as they are
    if url.startswith("/"):
        return url.split("?", 1)[0].split("#", 1)[0]
    candidate = url if url.startswith("http") else f"https://{url}"
    try:
        return urlsplit(candidate).path
    except ValueError:
        return url
