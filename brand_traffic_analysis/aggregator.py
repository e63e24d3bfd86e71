"""Aggregate search performance rows into branded / non-branded traffic statistics."""

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from .analyzers.brand import BrandMatcher
from .analyzers.content_type import ContentTypeCache, ContentTypeClassifier
from .analyzers.segmenter import PathLanguageSegmenter
from .constants import (
    LANGUAGE_CODES,
    MAX_BUCKET_SAMPLES,
    MAX_PATH_EXAMPLES,
    MAX_SAMPLE_ROWS,
    UNKNOWN_LANGUAGE,
    Category,
    LogMessage,
    RowKey,
)
from .models import (
    AggregatedResult,
    CategoryBucket,
    ClassificationConfig,
    LanguageStat,
    PathStat,
    Summary,
)
from .normalize import coerce_ctr, coerce_impressions, coerce_number, is_blank, normalize_rows


class AggregationEngine:
    """Classifies rows and aggregates traffic metrics in a single forward pass.

    Each call to ``aggregate`` builds its own matcher, buckets and counters, so
    one engine can serve any number of runs. Only the content type cache is
    shared between calls, since content types depend on nothing but the URL.

    Attributes:
        language_codes: Language codes recognized in URL paths.
        content_types: Classifier used to label landing pages in samples.
    """

    def __init__(
        self,
        *,
        language_codes: Sequence[str] | frozenset[str] = LANGUAGE_CODES,
        content_type_cache: ContentTypeCache | None = None,
    ):
        self.language_codes = language_codes
        self.content_types = ContentTypeClassifier(cache=content_type_cache)

    def aggregate(
        self, *, rows: Sequence[Mapping[str, Any]], config: ClassificationConfig
    ) -> AggregatedResult:
        """Aggregate rows according to ``config``.

        Rows without a query or page are skipped and counted. Everything else
        is classified, its metrics folded into the category bucket, and grouped
        by primary path and (optionally) language.

        Args:
            rows: Raw rows; keys are matched case-insensitively.
            config: Classification settings for this run.

        Returns:
            AggregatedResult: Buckets, summary, path/language tables and duplicates.
        """
        data = normalize_rows(rows)
        matcher = BrandMatcher(config=config)
        segmenter = PathLanguageSegmenter(language_codes=self.language_codes)

        branded = CategoryBucket()
        non_branded = CategoryBucket()
        summary = Summary(input_rows=len(data))
        path_stats: dict[str, PathStat] = {}
        language_stats: dict[str, LanguageStat] = {}
        path_url_examples: dict[str, list[str]] = {}
        path_url_counts: dict[str, int] = {}
        duplicates: list[dict[str, Any]] = []
        first_seen: dict[tuple[Any, Any], int] = {}

        for index, row in enumerate(data):
            query = row.get(RowKey.QUERY)
            page = row.get(RowKey.PAGE)
            if is_blank(query) or is_blank(page):
                logger.debug(LogMessage.SKIPPED_ROW.format(index))
                summary.skipped_rows += 1
                continue

            summary.total_rows += 1
            category = Category.BRANDED if matcher.is_branded(query) else Category.NON_BRANDED
            bucket = branded if category == Category.BRANDED else non_branded

            clicks = coerce_number(row.get(RowKey.CLICKS))
            impressions = coerce_impressions(row.get(RowKey.IMPRESSIONS))
            ctr = coerce_ctr(row.get(RowKey.CTR))
            position = coerce_number(row.get(RowKey.POSITION))

            bucket.count += 1
            bucket.metrics.add(
                clicks=clicks, impressions=impressions, position=position, count=bucket.count
            )
            if category == Category.BRANDED:
                summary.branded_rows += 1
            else:
                summary.non_branded_rows += 1

            segment = segmenter.segment_url(page, row_index=index)
            lang = segment.lang if config.detect_language else UNKNOWN_LANGUAGE

            if len(bucket.samples) < MAX_BUCKET_SAMPLES:
                content_type = self.content_types.classify(str(page))
                bucket.samples.append(
                    {
                        "query": query,
                        "clicks": clicks,
                        "impressions": impressions,
                        "ctr": ctr,
                        "avg_position": position,
                        "content_types": [content_type],
                        "urls": [
                            {
                                "url": page,
                                "content_type": content_type,
                                "language": lang if config.detect_language else None,
                            }
                        ],
                    }
                )

            primary_path = segment.primary_path
            path_stats.setdefault(primary_path, PathStat(name=primary_path)).add(category)
            path_url_counts[primary_path] = path_url_counts.get(primary_path, 0) + 1
            examples = path_url_examples.setdefault(primary_path, [])
            if len(examples) < MAX_PATH_EXAMPLES:
                examples.append(page)

            if config.detect_language:
                stat = language_stats.setdefault(lang, LanguageStat(name=lang))
                stat.add(category)
                stat.clicks += clicks

            key = (query, page)
            if key in first_seen:
                duplicates.append({**row, "original_index": first_seen[key]})
            else:
                first_seen[key] = index

        branded.metrics.finalize()
        non_branded.metrics.finalize()
        summary.finalize()

        logger.info(
            LogMessage.AGGREGATED.format(
                summary.total_rows,
                summary.branded_rows,
                summary.non_branded_rows,
                summary.skipped_rows,
            )
        )
        if duplicates:
            logger.info(LogMessage.DUPLICATES_FOUND.format(len(duplicates)))

        return AggregatedResult(
            data=data,
            branded=branded,
            non_branded=non_branded,
            summary=summary,
            path_data=list(path_stats.values()),
            language_data=list(language_stats.values()),
            path_url_examples=path_url_examples,
            path_url_counts=path_url_counts,
            borderline=CategoryBucket(),
            duplicates=duplicates,
            sample_rows=data[:MAX_SAMPLE_ROWS],
        )


def aggregate(
    rows: Sequence[Mapping[str, Any]],
    config: ClassificationConfig,
    *,
    content_type_cache: ContentTypeCache | None = None,
) -> AggregatedResult:
    """Aggregate rows with a fresh engine; see ``AggregationEngine.aggregate``."""
    engine = AggregationEngine(content_type_cache=content_type_cache)
    return engine.aggregate(rows=rows, config=config)


def remove_duplicates(rows: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the first row of every query/page pair.

    Args:
        rows: Raw or normalized rows.

    Returns:
        list[dict[str, Any]]: Normalized rows without repeated query/page pairs.
    """
    seen: set[tuple[Any, Any]] = set()
    cleaned: list[dict[str, Any]] = []

    for row in normalize_rows(rows):
        key = (row.get(RowKey.QUERY), row.get(RowKey.PAGE))
        if key in seen:
            continue
        seen.add(key)
        cleaned.append(row)

    removed = len(rows) - len(cleaned)
    if removed:
        logger.info(LogMessage.DUPLICATES_REMOVED.format(removed))
    return cleaned
