"""CLI interface for brand traffic analysis."""

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from .aggregator import AggregationEngine, remove_duplicates
from .analyzers.content_type import ContentTypeCache, ContentTypeClassifier
from .analyzers.quality import DataQualityAnalyzer
from .constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_REPORT_OUTPUT,
    EMPTY_STRING,
    EXIT_CODE_ERROR,
    CliHelp,
    LogMessage,
)
from .exceptions import DatasetRejectedError
from .loader import DatasetLoader
from .models import AggregatedResult, ClassificationConfig, QualityReport
from .reports import InsightGenerator, ReportGenerator
from .storage import ExportWriter

app = typer.Typer(help=CliHelp.APP)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help=CliHelp.VERBOSE),
) -> None:
    """Configure logging for all commands."""
    logger.remove()
    # Resolve sys.stderr on every write so a replaced stream is never held on to
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG" if verbose else "INFO")


def _load(csv_path: Path) -> list[dict]:
    try:
        return DatasetLoader().load(filepath=csv_path)
    except DatasetRejectedError as e:
        logger.error(LogMessage.DATASET_REJECTED.format(e.reason))
        raise typer.Exit(code=EXIT_CODE_ERROR)


def _print_summary(result: AggregatedResult, quality: QualityReport) -> None:
    summary = result.summary
    table = Table(title="Brand Traffic Summary")
    table.add_column("Category")
    table.add_column("Queries", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Clicks", justify="right")
    table.add_column("Impressions", justify="right")
    table.add_column("CTR", justify="right")
    table.add_column("Avg Position", justify="right")

    for label, bucket, share in (
        ("Branded", result.branded, summary.branded_percentage),
        ("Non-Branded", result.non_branded, summary.non_branded_percentage),
    ):
        metrics = bucket.metrics
        table.add_row(
            label,
            str(bucket.count),
            f"{share:.1f}%",
            str(metrics.clicks),
            str(metrics.impressions),
            f"{metrics.ctr * 100:.1f}%",
            f"{metrics.avg_position:.1f}",
        )

    console.print(table)
    console.print(
        f"Rows: {summary.total_rows} analyzed, {summary.skipped_rows} skipped, "
        f"{len(result.duplicates)} duplicates. Health score: {quality.health_score:.1f}/95"
    )


@app.command(help=CliHelp.ANALYZE_COMMAND)
def analyze(
    csv_path: Path = typer.Argument(..., help=CliHelp.CSV_PATH),
    brand_terms: str = typer.Option(
        EMPTY_STRING, "--brand-terms", "-b", envvar="BRAND_TERMS", help=CliHelp.BRAND_TERMS
    ),
    pattern: str = typer.Option(
        EMPTY_STRING, "--pattern", "-p", envvar="BRAND_CUSTOM_PATTERN", help=CliHelp.PATTERN
    ),
    case_sensitive: bool = typer.Option(
        False, "--case-sensitive", help=CliHelp.CASE_SENSITIVE
    ),
    detect_language: bool = typer.Option(
        True, "--detect-language/--no-detect-language", help=CliHelp.DETECT_LANGUAGE
    ),
    clean_duplicates: bool = typer.Option(
        False, "--clean-duplicates", help=CliHelp.CLEAN_DUPLICATES
    ),
    output_dir: Path = typer.Option(
        DEFAULT_OUTPUT_DIR, "--output-dir", "-o", help=CliHelp.OUTPUT_DIR
    ),
) -> None:
    rows = _load(csv_path)

    try:
        logger.info(LogMessage.ANALYSIS_HEADER)
        config = ClassificationConfig(
            brand_terms=brand_terms,
            use_custom_pattern=bool(pattern),
            custom_pattern=pattern,
            case_sensitive=case_sensitive,
            detect_language=detect_language,
        )
        cache = ContentTypeCache()
        engine = AggregationEngine(content_type_cache=cache)

        result = engine.aggregate(rows=rows, config=config)
        if clean_duplicates and result.duplicates:
            rows = remove_duplicates(result.data)
            result = engine.aggregate(rows=rows, config=config)

        quality = DataQualityAnalyzer().analyze(rows=result.data)

        writer = ExportWriter(
            output_dir=output_dir, content_types=ContentTypeClassifier(cache=cache)
        )
        writer.export_all(result=result, quality=quality, insights=InsightGenerator())
        ReportGenerator(result=result, quality=quality).generate_report(
            output_path=output_dir / DEFAULT_REPORT_OUTPUT
        )

        _print_summary(result, quality)
    except Exception as e:
        logger.exception(LogMessage.ERROR_OCCURRED.format(e))
        raise typer.Exit(code=EXIT_CODE_ERROR)


@app.command(help=CliHelp.VALIDATE_COMMAND)
def validate(
    csv_path: Path = typer.Argument(..., help=CliHelp.CSV_PATH),
) -> None:
    rows = _load(csv_path)
    quality = DataQualityAnalyzer().analyze(rows=rows)

    console.print(f"Health score: {quality.health_score:.1f}/95")
    for field, count in quality.missing_values.items():
        if count:
            console.print(f"  missing {field}: {count}")
    for warning in quality.warnings:
        console.print(f"{warning.type} ({warning.severity}): {warning.message} ({warning.count})")
    if not quality.warnings:
        console.print("No data quality issues detected")
