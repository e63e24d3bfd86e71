"""Analyzers for query classification, URL segmentation and data quality."""

from .brand import BrandMatcher
from .content_type import ContentTypeCache, ContentTypeClassifier
from .quality import DataQualityAnalyzer
from .segmenter import PathLanguageSegmenter

__all__ = [
    "BrandMatcher",
    "ContentTypeCache",
    "ContentTypeClassifier",
    "DataQualityAnalyzer",
    "PathLanguageSegmenter",
]
