"""Data models for brand traffic analysis."""

from dataclasses import asdict, dataclass, field
from typing import Any

from .constants import EMPTY_STRING, UNKNOWN_LANGUAGE, Category


@dataclass(frozen=True)
class ClassificationConfig:
    """Settings controlling how queries are classified for one analysis run.

    Attributes:
        brand_terms: Comma-separated list of brand terms.
        use_custom_pattern: Classify with ``custom_pattern`` instead of the terms.
        custom_pattern: Regular expression identifying branded queries.
        case_sensitive: Whether terms and pattern are matched case-sensitively.
        detect_language: Whether language codes are detected in URL paths.
    """

    brand_terms: str = EMPTY_STRING
    use_custom_pattern: bool = False
    custom_pattern: str = EMPTY_STRING
    case_sensitive: bool = False
    detect_language: bool = True

    @property
    def terms(self) -> list[str]:
        """Non-empty, trimmed brand terms in configured case."""
        raw = self.brand_terms if self.case_sensitive else self.brand_terms.lower()
        return [term.strip() for term in raw.split(",") if term.strip()]


@dataclass
class Segment:
    """Language and path information extracted from a landing page URL."""

    lang: str = UNKNOWN_LANGUAGE
    path: str = EMPTY_STRING
    primary_path: str = EMPTY_STRING


@dataclass
class CategoryMetrics:
    """Running traffic metrics for one category.

    ``avg_position`` is maintained as a streaming mean, see ``add``.
    """

    clicks: float = 0
    impressions: float = 0
    ctr: float = 0.0
    avg_position: float = 0.0

    def add(self, *, clicks: float, impressions: float, position: float, count: int) -> None:
        """Fold one row into the metrics; ``count`` includes the new row."""
        self.clicks += clicks
        self.impressions += impressions
        self.avg_position += (position - self.avg_position) / count

    def finalize(self) -> None:
        self.ctr = self.clicks / self.impressions if self.impressions > 0 else 0.0


@dataclass
class CategoryBucket:
    """Metrics and first-seen sample records for one traffic category."""

    count: int = 0
    metrics: CategoryMetrics = field(default_factory=CategoryMetrics)
    samples: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class PathStat:
    """Query counts for one primary URL path."""

    name: str
    total: int = 0
    branded_count: int = 0
    non_branded_count: int = 0

    def add(self, category: Category) -> None:
        self.total += 1
        if category == Category.BRANDED:
            self.branded_count += 1
        else:
            self.non_branded_count += 1

    @property
    def branded(self) -> float:
        """Share of branded queries, in percent."""
        return _percentage(self.branded_count, self.total)

    @property
    def non_branded(self) -> float:
        """Share of non-branded queries, in percent."""
        return _percentage(self.non_branded_count, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "total": self.total,
            "branded": self.branded,
            "non_branded": self.non_branded,
        }


@dataclass
class LanguageStat(PathStat):
    """Query counts and clicks for one detected language code."""

    clicks: float = 0

    @property
    def language(self) -> str:
        """Display name, e.g. ``En`` for ``en``."""
        return self.name[:1].upper() + self.name[1:]

    def to_dict(self) -> dict[str, Any]:
        return {
            "language": self.language,
            "code": self.name,
            "total": self.total,
            "clicks": self.clicks,
            "branded": self.branded,
            "non_branded": self.non_branded,
        }


@dataclass
class Summary:
    """Row counts and category shares for a whole run."""

    input_rows: int = 0
    total_rows: int = 0
    skipped_rows: int = 0
    branded_rows: int = 0
    non_branded_rows: int = 0
    branded_percentage: float = 0.0
    non_branded_percentage: float = 0.0

    def finalize(self) -> None:
        self.branded_percentage = _percentage(self.branded_rows, self.total_rows)
        self.non_branded_percentage = _percentage(self.non_branded_rows, self.total_rows)


@dataclass
class AggregatedResult:
    """Everything produced by a single aggregation pass.

    Attributes:
        data: All input rows with lower-cased keys, skipped rows included.
        branded: Branded traffic bucket.
        non_branded: Non-branded traffic bucket.
        summary: Row counts and category percentages.
        path_data: Statistics per primary path, in first-seen order.
        language_data: Statistics per language code, in first-seen order.
        path_url_examples: Up to 10 landing pages per primary path.
        path_url_counts: Number of rows per primary path.
        borderline: Reserved bucket for ambiguous queries; never populated.
        duplicates: Repeated query/page rows with the index of their first occurrence.
        sample_rows: First 50 normalized rows, for verification.
    """

    data: list[dict[str, Any]]
    branded: CategoryBucket
    non_branded: CategoryBucket
    summary: Summary
    path_data: list[PathStat]
    language_data: list[LanguageStat]
    path_url_examples: dict[str, list[str]]
    path_url_counts: dict[str, int]
    borderline: CategoryBucket
    duplicates: list[dict[str, Any]]
    sample_rows: list[dict[str, Any]]

    def bucket(self, category: Category) -> CategoryBucket:
        return self.branded if category == Category.BRANDED else self.non_branded

    def to_dict(self) -> dict[str, Any]:
        """Convert the result to a JSON-serializable dictionary.

        Returns:
            dict[str, Any]: Dictionary representation with percentages resolved.
        """
        return {
            "data": self.data,
            Category.BRANDED: asdict(self.branded),
            Category.NON_BRANDED: asdict(self.non_branded),
            "summary": asdict(self.summary),
            "path_data": [stat.to_dict() for stat in self.path_data],
            "language_data": [stat.to_dict() for stat in self.language_data],
            "path_url_examples": self.path_url_examples,
            "path_url_counts": self.path_url_counts,
            "borderline": {"samples": self.borderline.samples},
            "duplicates": self.duplicates,
            "sample_rows": self.sample_rows,
        }


@dataclass
class QualityWarning:
    """A data quality problem surfaced to the user.

    Attributes:
        type: Warning type (``MissingData`` or ``Outliers``).
        message: Human-readable description.
        severity: ``low``, ``medium`` or ``high``.
        count: Number of affected values.
        action: Suggested follow-up.
        details: Per-field payload backing the warning.
    """

    type: str
    message: str
    severity: str
    count: int
    action: str
    details: dict[str, Any]


@dataclass
class QualityReport:
    """Data quality assessment of a dataset."""

    health_score: float
    missing_values: dict[str, int]
    outliers: dict[str, list[dict[str, Any]]]
    warnings: list[QualityWarning]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _percentage(part: int, total: int) -> float:
    return part / total * 100 if total else 0.0
