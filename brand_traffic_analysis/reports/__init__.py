"""Report generation package - insights and summary reports.

- models.py: Data classes (Thresholds, Insight, RecommendedAction, InsightMetric)
- insights.py: Insight and recommended action derivation
- generator.py: Markdown / HTML / JSON report rendering
"""

from .generator import ReportGenerator
from .insights import InsightGenerator
from .models import Insight, InsightMetric, RecommendedAction, Thresholds

__all__ = [
    "Insight",
    "InsightGenerator",
    "InsightMetric",
    "RecommendedAction",
    "ReportGenerator",
    "Thresholds",
]
