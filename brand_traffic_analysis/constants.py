"""Constants and enumerations for brand traffic analysis."""

from enum import StrEnum
from typing import Final


# Ingestion
MAX_UPLOAD_BYTES: Final[int] = 10 * 1024 * 1024
CSV_SUFFIX: Final[str] = ".csv"

# Aggregation limits
MAX_BUCKET_SAMPLES: Final[int] = 10
MAX_PATH_EXAMPLES: Final[int] = 10
MAX_SAMPLE_ROWS: Final[int] = 50

# Custom pattern guard
PATTERN_CHUNK_SIZE: Final[int] = 100
PATTERN_MAX_STEPS: Final[int] = 1000
PATTERN_TIME_BUDGET_SECONDS: Final[float] = 0.25

# Quality analysis
OUTLIER_SIGMA: Final[int] = 3
MAX_HEALTH_SCORE: Final[float] = 95.0

# Path sentinels
UNKNOWN_LANGUAGE: Final[str] = "unknown"
HOMEPAGE_PATH: Final[str] = "/homepage"
INVALID_PATH: Final[str] = "/invalid"

# Output defaults
DEFAULT_OUTPUT_DIR: Final[str] = "output"
DEFAULT_ANALYSIS_OUTPUT: Final[str] = "analysis.json"
DEFAULT_QUALITY_OUTPUT: Final[str] = "quality.json"
DEFAULT_REPORT_OUTPUT: Final[str] = "summary_report.md"
JSON_INDENT: Final[int] = 2

# Empty Values
EMPTY_STRING: Final[str] = ""

# Numeric Constants
EXIT_CODE_ERROR: Final[int] = 1

# fmt: off
LANGUAGE_CODES: Final[frozenset[str]] = frozenset(
    {
        "en", "es", "es-es", "de", "fr", "pt", "ru", "it", "pl", "zh",
        "zh-hant", "zh-hans", "ja", "uk", "id", "lv", "ar", "bg", "ca", "cs",
        "da", "el", "fi", "he", "hi", "hr", "hu", "ko", "lt", "nl", "no", "ro",
        "sk", "sl", "sr", "sv", "th", "tr", "vi",
    }
)
# fmt: on


class RowKey(StrEnum):
    """Normalized (lower-cased) input column names."""

    QUERY = "query"
    PAGE = "page"
    CLICKS = "clicks"
    IMPRESSIONS = "impressions"
    CTR = "ctr"
    POSITION = "position"


REQUIRED_COLUMNS: Final[tuple[RowKey, ...]] = tuple(RowKey)


class Category(StrEnum):
    """Traffic categories a query can fall into."""

    BRANDED = "branded"
    NON_BRANDED = "non_branded"


class ContentType(StrEnum):
    """Coarse content categories inferred from landing page URLs."""

    BLOG = "Blog"
    PRODUCT = "Product"
    SUPPORT = "Support"
    ABOUT = "About"
    AUTH = "Auth"
    HOMEPAGE = "Homepage"
    OTHER = "Other"
    UNKNOWN = "Unknown"


# Evaluated in order, first match wins.
CONTENT_TYPE_RULES: Final[tuple[tuple[tuple[str, ...], ContentType], ...]] = (
    (("/blog", "/article", "/news"), ContentType.BLOG),
    (("/product", "/pricing", "/shop"), ContentType.PRODUCT),
    (("/support", "/help", "/faq"), ContentType.SUPPORT),
    (("/about", "/company", "/team"), ContentType.ABOUT),
    (("/login", "/signin", "/account"), ContentType.AUTH),
)

HOMEPAGE_PATHS: Final[frozenset[str]] = frozenset({"", "/", HOMEPAGE_PATH})

SUSPICIOUS_CONTENT_MARKERS: Final[tuple[str, ...]] = (
    "<script",
    "<iframe",
    "javascript:",
    "data:",
    "vbscript:",
)

FORMULA_PREFIXES: Final[tuple[str, ...]] = ("=", "+", "-", "@")
FORMULA_NEUTRALIZER: Final[str] = "'"


class WarningType(StrEnum):
    """Data quality warning types."""

    MISSING_DATA = "MissingData"
    OUTLIERS = "Outliers"


class Severity(StrEnum):
    """Data quality warning severities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExportFile(StrEnum):
    """File names of the CSV export tables."""

    URL_PATHS = "url_analysis_data.csv"
    BRANDED_QUERIES = "branded_queries.csv"
    NON_BRANDED_QUERIES = "non_branded_queries.csv"
    ALL_QUERIES = "query_data.csv"
    LANGUAGES = "language_analysis_data.csv"
    INSIGHTS = "insights_data.csv"


class LogMessage(StrEnum):
    """Log message templates."""

    ANALYSIS_HEADER = "=== BRAND TRAFFIC ANALYSIS ==="
    SKIPPED_ROW = "Skipping row {}: missing query or page"
    INVALID_URL = "Invalid URL in row {}: {}"
    PATTERN_ABORTED = "Custom pattern evaluation aborted: {}"
    PATTERN_INVALID = "Custom pattern could not be compiled: {}"
    AGGREGATED = "Aggregated {} rows ({} branded, {} non-branded, {} skipped)"
    DUPLICATES_FOUND = "Found {} duplicate query/page rows"
    DUPLICATES_REMOVED = "Removed {} duplicate rows"
    QUALITY_HEADER = "=== DATA QUALITY ==="
    HEALTH_SCORE = "Health score: {:.1f}"
    LOADING_FILE = "Loading {}..."
    LOADED_ROWS = "Loaded {} rows with columns: {}"
    DATASET_REJECTED = "Dataset rejected: {}"
    SAVED_EXPORT = "Saved {} rows to {}"
    SAVED_JSON = "Saved {} to {}"
    ERROR_OCCURRED = "Error occurred: {}"


class CliHelp(StrEnum):
    """CLI help messages."""

    APP = "Branded vs non-branded search traffic analysis tool"
    CSV_PATH = "Search performance CSV export (query, page, clicks, impressions, ctr, position)."
    BRAND_TERMS = "Comma-separated brand terms matched as substrings of each query."
    PATTERN = "Custom regular expression used instead of brand terms to detect branded queries."
    CASE_SENSITIVE = "Match brand terms or the custom pattern case-sensitively."
    DETECT_LANGUAGE = "Detect language codes in URL paths and aggregate traffic per language."
    CLEAN_DUPLICATES = "Drop repeated query/page rows (keeping the first) before aggregating."
    OUTPUT_DIR = "Directory where exports and reports are written."
    VERBOSE = "Enable debug logging."
    ANALYZE_COMMAND = """Classify and aggregate search traffic from a CSV export.

Rows are split into branded and non-branded traffic, aggregated per URL path
and language, scored for data quality, and written out as CSV/JSON exports and
a summary report."""
    VALIDATE_COMMAND = """Validate a CSV export and print its data quality report."""
