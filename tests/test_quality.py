import pytest

from brand_traffic_analysis.analyzers.quality import DataQualityAnalyzer
from brand_traffic_analysis.constants import Severity, WarningType

from .conftest import make_row


@pytest.fixture
def analyzer():
    return DataQualityAnalyzer()


def test_missing_and_outlier_warnings(analyzer):
    rows = [make_row(clicks=10) for _ in range(19)] + [make_row(clicks=10_000)]
    rows[0]["query"] = ""
    rows[1]["position"] = None

    report = analyzer.analyze(rows=rows)

    assert report.missing_values["query"] == 1
    assert report.missing_values["position"] == 1
    assert report.missing_values["clicks"] == 0
    assert [o["value"] for o in report.outliers["clicks"]] == [10_000]
    assert report.outliers["impressions"] == []

    by_type = {w.type: w for w in report.warnings}
    assert by_type[WarningType.MISSING_DATA].severity == Severity.MEDIUM
    assert by_type[WarningType.MISSING_DATA].count == 2
    assert by_type[WarningType.OUTLIERS].severity == Severity.LOW
    assert by_type[WarningType.OUTLIERS].count == 1


def test_outlier_payload_carries_query_and_mean(analyzer):
    rows = [make_row(query=f"q{i}", clicks=0) for i in range(10)] + [make_row(query="spike", clicks=11)]
    outlier = analyzer.analyze(rows=rows).outliers["clicks"][0]
    assert outlier["query"] == "spike"
    assert outlier["value"] == 11
    assert outlier["mean"] == pytest.approx(1)


def test_value_exactly_three_sigma_away_is_not_an_outlier(analyzer):
    # mean 1, population std 3: the upper bound is exactly 10
    rows = [make_row(clicks=10)] + [make_row(clicks=0) for _ in range(9)]
    assert analyzer.analyze(rows=rows).outliers["clicks"] == []


def test_zero_counts_as_present(analyzer):
    rows = [make_row(clicks=0, impressions=0, ctr=0, position=0)]
    report = analyzer.analyze(rows=rows)
    assert sum(report.missing_values.values()) == 0


def test_health_score_is_capped(analyzer):
    rows = [make_row() for _ in range(5)]
    report = analyzer.analyze(rows=rows)
    assert report.health_score == 95
    assert report.warnings == []


def test_health_score_reflects_completeness(analyzer):
    rows = [make_row(query=None, page=None, clicks=None), make_row(query=None, page=None, clicks=None)]
    # 6 of 12 cells missing
    assert analyzer.analyze(rows=rows).health_score == pytest.approx(50)


def test_empty_dataset_scores_zero(analyzer):
    report = analyzer.analyze(rows=[])
    assert report.health_score == 0
    assert report.warnings == []
    assert report.outliers == {"clicks": [], "impressions": []}


def test_impressions_with_separators_are_read(analyzer):
    rows = [make_row(impressions="1,000") for _ in range(10)] + [make_row(impressions="1,000,000")]
    assert [o["value"] for o in analyzer.analyze(rows=rows).outliers["impressions"]] == [1_000_000]


def test_to_dict(analyzer):
    data = analyzer.analyze(rows=[make_row(query="")]).to_dict()
    assert data["missing_values"]["query"] == 1
    assert data["warnings"][0]["type"] == "MissingData"


def test_impressions_missing_everywhere(analyzer):
    rows = [make_row(query=f"q{i}", impressions=None) for i in range(4)]
    report = analyzer.analyze(rows=rows)

    assert report.missing_values["impressions"] == len(rows)
    warning = next(w for w in report.warnings if w.type == WarningType.MISSING_DATA)
    assert warning.severity == Severity.MEDIUM
    assert warning.count == len(rows)
