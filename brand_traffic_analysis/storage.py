"""Storage for analysis results and CSV exports."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import polars as pl
from loguru import logger

from .analyzers.content_type import ContentTypeClassifier
from .constants import (
    DEFAULT_ANALYSIS_OUTPUT,
    DEFAULT_QUALITY_OUTPUT,
    JSON_INDENT,
    Category,
    ContentType,
    ExportFile,
    LogMessage,
)
from .models import AggregatedResult, QualityReport
from .reports.insights import InsightGenerator
from .sanitizer import sanitize_cell

URL_COLUMNS = ["URL Path", "Queries", "Branded %", "Non-Branded %", "Content Type"]
QUERY_COLUMNS = [
    "Query",
    "Clicks",
    "Impressions",
    "CTR",
    "Avg Position",
    "Content Types",
    "Landing Page",
    "Language",
]
LANGUAGE_COLUMNS = ["Language", "Code", "Total Queries", "Clicks", "Branded %", "Non-Branded %"]
INSIGHT_COLUMNS = ["Insight Type", "Description", "Value"]


class ExportWriter:
    """Writes analysis results to JSON and to fixed-layout CSV tables.

    Every CSV field is quoted and passed through ``sanitize_cell`` so that
    exported text is never evaluated as a spreadsheet formula.

    Attributes:
        output_dir: Directory receiving all exports.
        content_types: Classifier used for the URL path table.
    """

    def __init__(
        self,
        *,
        output_dir: Path | str,
        content_types: ContentTypeClassifier | None = None,
    ):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.content_types = content_types or ContentTypeClassifier()

    def save_analysis(
        self,
        *,
        result: AggregatedResult,
        filename: str = DEFAULT_ANALYSIS_OUTPUT,
    ) -> Path:
        """Save the aggregated result to a JSON file.

        Uses default string conversion for non-serializable types.
        """
        filepath = self.output_dir / filename
        with filepath.open("w") as f:
            json.dump(result.to_dict(), f, indent=JSON_INDENT, default=str)
        logger.success(LogMessage.SAVED_JSON.format("analysis", filepath))
        return filepath

    def save_quality(
        self,
        *,
        quality: QualityReport,
        filename: str = DEFAULT_QUALITY_OUTPUT,
    ) -> Path:
        filepath = self.output_dir / filename
        with filepath.open("w") as f:
            json.dump(quality.to_dict(), f, indent=JSON_INDENT, default=str)
        logger.success(LogMessage.SAVED_JSON.format("quality report", filepath))
        return filepath

    def export_url_data(self, *, result: AggregatedResult) -> Path:
        """URL path table: one row per primary path."""
        rows = [
            [
                path.name,
                path.total,
                path.branded,
                path.non_branded,
                self.content_types.classify(path.name),
            ]
            for path in result.path_data
        ]
        return self._write_csv(URL_COLUMNS, rows, ExportFile.URL_PATHS)

    def export_query_data(
        self, *, result: AggregatedResult, category: Category | None = None
    ) -> Path:
        """Query table built from the retained samples.

        Args:
            result: Aggregated analysis.
            category: Export only this category's samples; both when None.
        """
        if category == Category.BRANDED:
            samples, filename = result.branded.samples, ExportFile.BRANDED_QUERIES
        elif category == Category.NON_BRANDED:
            samples, filename = result.non_branded.samples, ExportFile.NON_BRANDED_QUERIES
        else:
            samples = result.branded.samples + result.non_branded.samples
            filename = ExportFile.ALL_QUERIES

        rows = []
        for sample in samples:
            first_url = sample["urls"][0] if sample.get("urls") else {}
            rows.append(
                [
                    sample.get("query") or "",
                    sample.get("clicks") or 0,
                    sample.get("impressions") or 0,
                    f"{(sample.get('ctr') or 0) * 100:.1f}",
                    f"{(sample.get('avg_position') or 0):.1f}",
                    ";".join(sample.get("content_types") or []) or ContentType.UNKNOWN,
                    first_url.get("url") or "",
                    first_url.get("language") or "",
                ]
            )
        return self._write_csv(QUERY_COLUMNS, rows, filename)

    def export_language_data(self, *, result: AggregatedResult) -> Path:
        rows = [
            [lang.language, lang.name, lang.total, lang.clicks, lang.branded, lang.non_branded]
            for lang in result.language_data
        ]
        return self._write_csv(LANGUAGE_COLUMNS, rows, ExportFile.LANGUAGES)

    def export_insights_data(
        self, *, result: AggregatedResult, insights: InsightGenerator | None = None
    ) -> Path:
        insights = insights or InsightGenerator()
        rows = [
            [metric.insight_type, metric.description, metric.value]
            for metric in insights.headline_metrics(result)
        ]
        return self._write_csv(INSIGHT_COLUMNS, rows, ExportFile.INSIGHTS)

    def export_all(
        self,
        *,
        result: AggregatedResult,
        quality: QualityReport,
        insights: InsightGenerator | None = None,
    ) -> list[Path]:
        """Write every JSON and CSV export.

        Returns:
            list[Path]: Paths of all written files.
        """
        return [
            self.save_analysis(result=result),
            self.save_quality(quality=quality),
            self.export_url_data(result=result),
            self.export_query_data(result=result, category=Category.BRANDED),
            self.export_query_data(result=result, category=Category.NON_BRANDED),
            self.export_language_data(result=result),
            self.export_insights_data(result=result, insights=insights),
        ]

    def _write_csv(
        self, columns: list[str], rows: Sequence[Sequence[Any]], filename: str
    ) -> Path:
        filepath = self.output_dir / filename

        # All columns as text so every field is quoted the same way
        df = pl.DataFrame(
            [[_cell_text(sanitize_cell(value)) for value in row] for row in rows],
            schema={column: pl.String for column in columns},
            orient="row",
        )
        df.write_csv(filepath, quote_style="always")

        logger.success(LogMessage.SAVED_EXPORT.format(len(df), filepath))
        return filepath


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
