"""Data models for report generation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Thresholds:
    """Configurable thresholds for insight generation."""

    low_branded_ctr_pct: float = 2.0
    high_branded_ctr_pct: float = 3.0
    weak_position: float = 5.0
    conversion_min_clicks: int = 500
    conversion_max_ctr_pct: float = 2.0
    backlink_min_queries: int = 500
    backlink_min_branded_pct: float = 50.0
    low_traffic_path_queries: int = 100
    language_min_queries: int = 50
    language_low_branded_pct: float = 20.0
    secondary_language_min_queries: int = 100
    branded_dominance_ratio: float = 0.8
    branded_weakness_ratio: float = 0.2
    healthy_score: float = 80.0


@dataclass
class Insight:
    """A single observation derived from the analysis."""

    kind: str
    message: str


@dataclass
class RecommendedAction:
    """A follow-up suggested by one of the insights."""

    insight: str
    action: str
    priority: str  # Severity value


@dataclass
class InsightMetric:
    """Headline metric exported in the insights table."""

    insight_type: str
    description: str
    value: str
