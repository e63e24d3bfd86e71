"""Rule-based data quality analyzer."""

from collections.abc import Sequence
from typing import Any

import pandas as pd
from loguru import logger

from ..constants import (
    MAX_HEALTH_SCORE,
    OUTLIER_SIGMA,
    REQUIRED_COLUMNS,
    LogMessage,
    RowKey,
    Severity,
    WarningType,
)
from ..models import QualityReport, QualityWarning
from ..normalize import as_native, coerce_impressions, coerce_number, is_blank


class DataQualityAnalyzer:
    """Scores how complete and well-behaved a search performance dataset is.

    Checks performed on the normalized rows:
    - Missing values per expected field (numeric zero counts as present)
    - Clicks and impressions further than ``sigma`` standard deviations from the mean

    Attributes:
        fields: Fields checked for missing values.
        outlier_fields: Numeric fields checked for outliers.
        sigma: Outlier threshold in population standard deviations.
    """

    def __init__(
        self,
        *,
        fields: Sequence[str] = REQUIRED_COLUMNS,
        outlier_fields: Sequence[str] = (RowKey.CLICKS, RowKey.IMPRESSIONS),
        sigma: float = OUTLIER_SIGMA,
    ):
        self.fields = tuple(fields)
        self.outlier_fields = tuple(outlier_fields)
        self.sigma = sigma

    def analyze(self, *, rows: Sequence[dict[str, Any]]) -> QualityReport:
        """Analyze normalized rows.

        Args:
            rows: Rows with lower-cased keys, skipped rows included.

        Returns:
            QualityReport: Health score, missing values, outliers and warnings.
        """
        logger.info(LogMessage.QUALITY_HEADER)

        missing_values = {
            field: sum(1 for row in rows if is_blank(row.get(field)))
            for field in self.fields
        }
        outliers = {field: self._find_outliers(rows, field) for field in self.outlier_fields}

        total_missing = sum(missing_values.values())
        cells = len(rows) * len(self.fields)
        completeness = (1 - total_missing / cells) * 100 if cells else 0.0
        health_score = max(0.0, min(MAX_HEALTH_SCORE, completeness))

        warnings: list[QualityWarning] = []
        if total_missing > 0:
            warnings.append(
                QualityWarning(
                    type=WarningType.MISSING_DATA,
                    message="Missing values detected in dataset",
                    severity=Severity.MEDIUM,
                    count=total_missing,
                    action="View affected rows",
                    details=missing_values,
                )
            )

        outlier_count = sum(len(found) for found in outliers.values())
        if outlier_count > 0:
            warnings.append(
                QualityWarning(
                    type=WarningType.OUTLIERS,
                    message="Statistical outliers detected in metrics",
                    severity=Severity.LOW,
                    count=outlier_count,
                    action="Review outliers",
                    details=outliers,
                )
            )

        report = QualityReport(
            health_score=health_score,
            missing_values=missing_values,
            outliers=outliers,
            warnings=warnings,
        )
        self._print_summary(report=report)
        return report

    def _find_outliers(self, rows: Sequence[dict[str, Any]], field: str) -> list[dict[str, Any]]:
        coerce = coerce_impressions if field == RowKey.IMPRESSIONS else coerce_number
        # Missing values count as zero, unparsable text is left out
        values = pd.Series(
            [coerce(row.get(field), default=None) for row in rows], dtype="float64"
        )
        present = values.dropna()
        if present.empty:
            return []

        mean = float(present.mean())
        std = float(present.std(ddof=0))
        lower, upper = mean - self.sigma * std, mean + self.sigma * std

        flagged = values[(values < lower) | (values > upper)]
        return [
            {
                "query": rows[index].get(RowKey.QUERY),
                "value": as_native(value),
                "mean": mean,
            }
            for index, value in flagged.items()
        ]

    def _print_summary(self, *, report: QualityReport) -> None:
        logger.info(LogMessage.HEALTH_SCORE.format(report.health_score))
        for warning in report.warnings:
            logger.info(f"  {warning.type} ({warning.severity}): {warning.count}")
