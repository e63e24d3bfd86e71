import pytest

from brand_traffic_analysis.analyzers.content_type import ContentTypeCache, ContentTypeClassifier
from brand_traffic_analysis.constants import ContentType


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://site.com/blog/post", ContentType.BLOG),
        ("https://site.com/News/today", ContentType.BLOG),
        ("https://site.com/pricing", ContentType.PRODUCT),
        ("https://site.com/shop/item", ContentType.PRODUCT),
        ("https://site.com/faq", ContentType.SUPPORT),
        ("https://site.com/team", ContentType.ABOUT),
        ("https://site.com/login", ContentType.AUTH),
        ("https://site.com/", ContentType.HOMEPAGE),
        ("https://site.com", ContentType.HOMEPAGE),
        ("site.com", ContentType.HOMEPAGE),
        ("/homepage", ContentType.HOMEPAGE),
        ("https://site.com/careers", ContentType.OTHER),
        ("", ContentType.UNKNOWN),
        (None, ContentType.UNKNOWN),
    ],
)
def test_classify(url, expected):
    assert ContentTypeClassifier().classify(url) == expected


def test_first_matching_rule_wins():
    # Contains both a blog and a product marker
    assert ContentTypeClassifier().classify("https://site.com/product/blog") == ContentType.BLOG


def test_results_are_memoized_per_cache():
    cache = ContentTypeCache()
    classifier = ContentTypeClassifier(cache=cache)
    classifier.classify("https://site.com/blog")
    classifier.classify("https://site.com/blog")
    assert len(cache) == 1
    assert cache.get("https://site.com/blog") == ContentType.BLOG

    # A second classifier sharing the cache reads the stored label
    assert ContentTypeClassifier(cache=cache).classify("https://site.com/blog") == ContentType.BLOG


def test_bounded_cache_evicts_least_recently_used():
    cache = ContentTypeCache(max_size=2)
    classifier = ContentTypeClassifier(cache=cache)
    classifier.classify("https://a.com/blog")
    classifier.classify("https://b.com/shop")
    classifier.classify("https://a.com/blog")
    classifier.classify("https://c.com/faq")

    assert len(cache) == 2
    assert cache.get("https://b.com/shop") is None
    assert cache.get("https://a.com/blog") == ContentType.BLOG
