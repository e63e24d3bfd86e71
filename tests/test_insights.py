import pytest

from brand_traffic_analysis.aggregator import aggregate
from brand_traffic_analysis.constants import Severity
from brand_traffic_analysis.models import ClassificationConfig, QualityReport
from brand_traffic_analysis.reports import InsightGenerator, Thresholds
from brand_traffic_analysis.reports.insights import NO_INSIGHTS

from .conftest import make_row

CONFIG = ClassificationConfig(brand_terms="brandx")


def kinds(insights):
    return [insight.kind for insight in insights]


@pytest.fixture
def generator():
    return InsightGenerator()


def test_empty_result_has_placeholder(generator):
    insights = generator.generate(aggregate([], CONFIG))
    assert len(insights) == 1
    assert insights[0].kind == "none"
    assert insights[0].message == NO_INSIGHTS
    assert generator.recommended_actions(aggregate([], CONFIG)) == []


def test_headline_metrics(generator, rows, config):
    metrics = generator.headline_metrics(aggregate(rows, config))
    values = {metric.insight_type: metric.value for metric in metrics}
    assert values == {
        "Branded CTR": "6.0%",
        "Non-Branded CTR": "0.7%",
        "Branded Avg Position": "1.5",
        "Non-Branded Avg Position": "8.7",
        "Branded Percentage": "40.0%",
        "Non-Branded Percentage": "60.0%",
    }


def test_low_branded_ctr_and_dominance(generator):
    result = aggregate([make_row(query="brandx", clicks=1, impressions=100)], CONFIG)
    messages = [insight.message for insight in generator.generate(result)]

    assert any("Branded CTR (1.0%) is below industry average (2%)" in m for m in messages)
    assert any("Branded traffic dominates at 100.0%" in m for m in messages)

    actions = [action.insight for action in generator.recommended_actions(result)]
    assert "Low Branded CTR" in actions
    assert "Over-Reliance on Branded Traffic" in actions


def test_high_branded_ctr(generator):
    result = aggregate([make_row(query="brandx", clicks=10, impressions=100)], CONFIG)
    assert any("above industry average" in i.message for i in generator.generate(result))


def test_weak_non_branded_position(generator):
    result = aggregate([make_row(query="shoes", position=9)], CONFIG)
    insights = generator.generate(result)
    assert any("Non-Branded average position (9.0)" in i.message for i in insights)
    assert "Low Branded Traffic" in [a.insight for a in generator.recommended_actions(result)]


def test_top_query_and_conversion_potential(generator):
    rows = [
        make_row(query="shoes", clicks=600, impressions=100_000, ctr="0.6%", position=3),
        make_row(query="socks", clicks=20, impressions=200, ctr="10%", position=3),
    ]
    result = aggregate(rows, CONFIG)
    insights = generator.generate(result)

    top = next(i for i in insights if i.kind == "top_query")
    assert '"shoes" with 600 clicks' in top.message
    conversion = next(i for i in insights if i.kind == "conversion_potential")
    assert "(0.6%)" in conversion.message
    assert "Conversion Potential" in [a.insight for a in generator.recommended_actions(result)]


def test_cannibalization(generator):
    rows = [
        make_row(query="shoes", page="https://site.com/a"),
        make_row(query="shoes", page="https://site.com/b"),
        make_row(query="socks", page="https://site.com/a"),
    ]
    result = aggregate(rows, CONFIG)
    insight = next(i for i in generator.generate(result) if i.kind == "cannibalization")
    assert '"shoes" is landing on multiple pages (2 URLs)' in insight.message
    assert "Keyword Cannibalization" in [a.insight for a in generator.recommended_actions(result)]


def test_data_quality_and_duplicates(generator):
    result = aggregate([make_row(), make_row()], CONFIG)
    quality = QualityReport(health_score=40.0, missing_values={}, outliers={}, warnings=[])
    data_quality = [i.message for i in generator.generate(result, quality) if i.kind == "data_quality"]
    assert len(data_quality) == 2
    assert "Data health score is 40.0" in data_quality[0]
    assert data_quality[1].startswith("1 rows repeat")


def test_language_insights(generator):
    rows = [make_row(query=f"shoes {i}", page=f"https://site.com/fr/p/{i}") for i in range(60)]
    result = aggregate(rows, CONFIG)
    language = next(i for i in generator.generate(result) if i.kind == "language")
    assert "Language Fr (60 queries) has low branded traffic (0.0%)" in language.message
    assert "Language Branding Opportunity" in [a.insight for a in generator.recommended_actions(result)]


def test_custom_thresholds():
    result = aggregate([make_row(query="brandx", clicks=1, impressions=100)], CONFIG)
    generator = InsightGenerator(Thresholds(low_branded_ctr_pct=0.5, branded_dominance_ratio=1.0))
    kinds_found = kinds(generator.generate(result))
    assert "performance" not in kinds_found
    assert "traffic_balance" not in kinds_found


def test_action_priorities_use_severities(generator):
    result = aggregate([make_row(query="brandx", clicks=1, impressions=100)], CONFIG)
    priorities = {a.insight: a.priority for a in generator.recommended_actions(result)}
    assert priorities["Low Branded CTR"] == Severity.HIGH
    assert priorities["Over-Reliance on Branded Traffic"] == Severity.HIGH
