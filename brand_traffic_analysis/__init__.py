"""Branded vs non-branded search traffic analysis package."""

from .aggregator import AggregationEngine, aggregate, remove_duplicates
from .analyzers.brand import BrandMatcher
from .analyzers.content_type import ContentTypeCache, ContentTypeClassifier
from .analyzers.quality import DataQualityAnalyzer
from .analyzers.segmenter import PathLanguageSegmenter
from .exceptions import BrandTrafficError, DatasetRejectedError
from .loader import DatasetLoader
from .models import AggregatedResult, ClassificationConfig, QualityReport
from .sanitizer import sanitize_cell, sanitize_html, validate_content
from .storage import ExportWriter

__all__ = [
    "AggregatedResult",
    "AggregationEngine",
    "BrandMatcher",
    "BrandTrafficError",
    "ClassificationConfig",
    "ContentTypeCache",
    "ContentTypeClassifier",
    "DataQualityAnalyzer",
    "DatasetLoader",
    "DatasetRejectedError",
    "ExportWriter",
    "PathLanguageSegmenter",
    "QualityReport",
    "aggregate",
    "remove_duplicates",
    "sanitize_cell",
    "sanitize_html",
    "validate_content",
]
