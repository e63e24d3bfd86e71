import json

import pytest

from brand_traffic_analysis.aggregator import aggregate
from brand_traffic_analysis.analyzers.quality import DataQualityAnalyzer
from brand_traffic_analysis.reports import ReportGenerator

from .conftest import make_row


@pytest.fixture
def generator(rows, config):
    rows.append(make_row(query="<b>brandx</b> & co", page="https://site.com/blog/x", clicks=99))
    result = aggregate(rows, config)
    quality = DataQualityAnalyzer().analyze(rows=result.data)
    return ReportGenerator(result=result, quality=quality)


def test_markdown_report(generator):
    markdown = generator.build_markdown()
    assert markdown.startswith("# Brand Traffic Analysis Report\n")
    assert "**Rows Analyzed:** 6 (1 skipped)" in markdown
    assert "| Branded | 3 | 50.0% |" in markdown
    assert "| /blog | 3 |" in markdown
    assert "## Languages" in markdown
    assert "**MissingData** (medium)" in markdown
    assert "- **Duplicates:** 1 repeated query/page rows" in markdown
    assert "## Insights" in markdown


def test_html_escapes_dataset_values(generator):
    html = generator.build_html()
    assert "<b>brandx</b>" not in html
    assert "&lt;b&gt;brandx&lt;/b&gt; &amp; co" in html
    assert html.startswith("<!DOCTYPE html>")


def test_generate_report_writes_companions(generator, tmp_path):
    output = tmp_path / "summary_report.md"
    generator.generate_report(output_path=output)

    assert output.read_text() == generator.build_markdown()
    assert output.with_suffix(".html").exists()

    summary = json.loads(output.with_suffix(".json").read_text())
    assert len(summary["headline_metrics"]) == 6
    assert summary["insights"]
    assert {"insight", "action", "priority"} <= set(summary["recommended_actions"][0])
