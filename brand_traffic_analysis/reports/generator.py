"""Generate summary reports from an aggregated analysis."""

import json
from dataclasses import asdict
from pathlib import Path

from loguru import logger

from ..constants import JSON_INDENT
from ..models import AggregatedResult, QualityReport
from ..sanitizer import sanitize_html
from .insights import InsightGenerator
from .models import Thresholds


class ReportGenerator:
    """Render the analysis, data quality and insights as Markdown, HTML and JSON."""

    def __init__(
        self,
        *,
        result: AggregatedResult,
        quality: QualityReport,
        thresholds: Thresholds | None = None,
    ):
        """Initialize report generator.

        Args:
            result: Aggregated analysis to report on
            quality: Data quality report of the same dataset
            thresholds: Optional custom thresholds for insight generation
        """
        self.result = result
        self.quality = quality
        self.insight_generator = InsightGenerator(thresholds)

    def build_markdown(self) -> str:
        result, quality = self.result, self.quality
        summary = result.summary
        branded, non_branded = result.branded.metrics, result.non_branded.metrics

        lines = [
            "# Brand Traffic Analysis Report",
            "",
            f"**Rows Analyzed:** {summary.total_rows} ({summary.skipped_rows} skipped)",
            f"**Data Health Score:** {quality.health_score:.1f}/95",
            "",
            "---",
            "",
            "## Traffic Split",
            "",
            "| Category | Queries | Share | Clicks | Impressions | CTR | Avg Position |",
            "|----------|---------|-------|--------|-------------|-----|--------------|",
            f"| Branded | {summary.branded_rows} | {summary.branded_percentage:.1f}% "
            f"| {branded.clicks} | {branded.impressions} | {branded.ctr * 100:.1f}% "
            f"| {branded.avg_position:.1f} |",
            f"| Non-Branded | {summary.non_branded_rows} | {summary.non_branded_percentage:.1f}% "
            f"| {non_branded.clicks} | {non_branded.impressions} | {non_branded.ctr * 100:.1f}% "
            f"| {non_branded.avg_position:.1f} |",
            "",
            "## URL Paths",
            "",
            "| Path | Queries | Branded % | Non-Branded % |",
            "|------|---------|-----------|---------------|",
        ]
        for path in sorted(result.path_data, key=lambda p: p.total, reverse=True):
            lines.append(
                f"| {path.name} | {path.total} | {path.branded:.1f}% | {path.non_branded:.1f}% |"
            )

        if result.language_data:
            lines.extend(
                [
                    "",
                    "## Languages",
                    "",
                    "| Language | Code | Queries | Clicks | Branded % | Non-Branded % |",
                    "|----------|------|---------|--------|-----------|---------------|",
                ]
            )
            for lang in sorted(result.language_data, key=lambda l: l.total, reverse=True):
                lines.append(
                    f"| {lang.language} | {lang.name} | {lang.total} | {lang.clicks} "
                    f"| {lang.branded:.1f}% | {lang.non_branded:.1f}% |"
                )

        lines.extend(["", "## Data Quality", ""])
        if quality.warnings:
            for warning in quality.warnings:
                lines.append(
                    f"- **{warning.type}** ({warning.severity}): {warning.message} "
                    f"({warning.count} values). {warning.action}."
                )
        else:
            lines.append("- No data quality issues detected")
        if result.duplicates:
            lines.append(f"- **Duplicates:** {len(result.duplicates)} repeated query/page rows")

        lines.extend(["", "## Insights", ""])
        for insight in self.insight_generator.generate(result, quality):
            lines.append(f"- {insight.message}")

        actions = self.insight_generator.recommended_actions(result)
        if actions:
            lines.extend(["", "## Recommended Actions", ""])
            for action in actions:
                lines.append(f"- **[{action.priority.upper()}] {action.insight}:** {action.action}")

        return "\n".join(lines) + "\n"

    def build_html(self) -> str:
        """Render the headline metrics, paths and insights as a standalone HTML page.

        Every dataset-derived value is escaped before it is placed in markup.
        """
        result = self.result
        rows = [
            "<tr>"
            + "".join(
                f"<td>{sanitize_html(cell)}</td>"
                for cell in (metric.insight_type, metric.description, metric.value)
            )
            + "</tr>"
            for metric in self.insight_generator.headline_metrics(result)
        ]
        path_rows = [
            "<tr>"
            + "".join(
                f"<td>{sanitize_html(cell)}</td>"
                for cell in (path.name, path.total, f"{path.branded:.1f}%", f"{path.non_branded:.1f}%")
            )
            + "</tr>"
            for path in sorted(result.path_data, key=lambda p: p.total, reverse=True)
        ]
        insights = [
            f"<li>{sanitize_html(insight.message)}</li>"
            for insight in self.insight_generator.generate(result, self.quality)
        ]

        return "\n".join(
            [
                "<!DOCTYPE html>",
                '<html lang="en">',
                '<head><meta charset="utf-8"><title>Brand Traffic Analysis Report</title></head>',
                "<body>",
                "<h1>Brand Traffic Analysis Report</h1>",
                f"<p>Data health score: {self.quality.health_score:.1f}/95</p>",
                "<h2>Key Metrics</h2>",
                "<table>",
                "<tr><th>Insight Type</th><th>Description</th><th>Value</th></tr>",
                *rows,
                "</table>",
                "<h2>URL Paths</h2>",
                "<table>",
                "<tr><th>Path</th><th>Queries</th><th>Branded %</th><th>Non-Branded %</th></tr>",
                *path_rows,
                "</table>",
                "<h2>Insights</h2>",
                "<ul>",
                *insights,
                "</ul>",
                "</body>",
                "</html>",
            ]
        )

    def generate_report(self, *, output_path: Path) -> None:
        """Write the Markdown report plus HTML and JSON companions.

        Args:
            output_path: Path of the Markdown report; the companions share its stem.
        """
        logger.info("Generating summary report...")
        output_path = Path(output_path)

        output_path.write_text(self.build_markdown())
        logger.success(f"Report saved to {output_path}")

        html_path = output_path.with_suffix(".html")
        html_path.write_text(self.build_html())
        logger.success(f"HTML report saved to {html_path}")

        summary_json = {
            "headline_metrics": [
                asdict(metric) for metric in self.insight_generator.headline_metrics(self.result)
            ],
            "insights": [
                asdict(insight)
                for insight in self.insight_generator.generate(self.result, self.quality)
            ],
            "recommended_actions": [
                asdict(action)
                for action in self.insight_generator.recommended_actions(self.result)
            ],
        }
        json_path = output_path.with_suffix(".json")
        with json_path.open("w") as f:
            json.dump(summary_json, f, indent=JSON_INDENT, default=str)
        logger.success(f"Summary JSON saved to {json_path}")
