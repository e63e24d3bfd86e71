"""Derive actionable insights from an aggregated analysis."""

from collections import defaultdict
from typing import Any

from ..constants import RowKey, Severity
from ..models import AggregatedResult, PathStat, QualityReport
from .models import Insight, InsightMetric, RecommendedAction, Thresholds

NO_INSIGHTS = "No significant insights generated from the current data."


class InsightGenerator:
    """Turns an aggregated result into insights and recommended actions."""

    def __init__(self, thresholds: Thresholds | None = None):
        self.thresholds = thresholds or Thresholds()

    def headline_metrics(self, result: AggregatedResult) -> list[InsightMetric]:
        """CTR, average position and traffic share of both categories."""
        branded = result.branded.metrics
        non_branded = result.non_branded.metrics
        summary = result.summary
        return [
            InsightMetric("Branded CTR", "Branded traffic CTR", f"{branded.ctr * 100:.1f}%"),
            InsightMetric(
                "Non-Branded CTR", "Non-Branded traffic CTR", f"{non_branded.ctr * 100:.1f}%"
            ),
            InsightMetric(
                "Branded Avg Position",
                "Average position for branded terms",
                f"{branded.avg_position:.1f}",
            ),
            InsightMetric(
                "Non-Branded Avg Position",
                "Average position for non-branded terms",
                f"{non_branded.avg_position:.1f}",
            ),
            InsightMetric(
                "Branded Percentage",
                "Percentage of branded traffic",
                f"{summary.branded_percentage:.1f}%",
            ),
            InsightMetric(
                "Non-Branded Percentage",
                "Percentage of non-branded traffic",
                f"{summary.non_branded_percentage:.1f}%",
            ),
        ]

    def generate(
        self, result: AggregatedResult, quality: QualityReport | None = None
    ) -> list[Insight]:
        """Generate insight sentences.

        Args:
            result: Aggregated analysis.
            quality: Optional data quality report, adds data health notes.

        Returns:
            list[Insight]: Insights in a stable order; a single placeholder when
            nothing stands out.
        """
        t = self.thresholds
        insights: list[Insight] = []
        branded_ctr = result.branded.metrics.ctr * 100
        non_branded_pos = result.non_branded.metrics.avg_position
        total_rows = result.summary.total_rows

        top_branded = max(result.path_data, key=lambda p: p.branded, default=None)
        top_non_branded = max(result.path_data, key=lambda p: p.non_branded, default=None)
        if top_branded is not None and top_branded.branded_count:
            insights.append(
                Insight(
                    "traffic_distribution",
                    f"Top branded traffic source is {top_branded.name} with "
                    f"{top_branded.branded:.1f}% branded queries. This path could be a strong "
                    "candidate for further branded content investment.",
                )
            )
        if top_non_branded is not None and top_non_branded.non_branded_count:
            insights.append(
                Insight(
                    "traffic_distribution",
                    f"Top non-branded traffic source is {top_non_branded.name} with "
                    f"{top_non_branded.non_branded:.1f}% non-branded queries. Consider "
                    "optimizing this path for conversions or additional SEO strategies.",
                )
            )

        if result.branded.count:
            if branded_ctr < t.low_branded_ctr_pct:
                insights.append(
                    Insight(
                        "performance",
                        f"Branded CTR ({branded_ctr:.1f}%) is below industry average "
                        f"({t.low_branded_ctr_pct:g}%). Branded search results may not be "
                        "compelling enough to attract clicks.",
                    )
                )
            elif branded_ctr > t.high_branded_ctr_pct:
                insights.append(
                    Insight(
                        "performance",
                        f"Branded CTR ({branded_ctr:.1f}%) is above industry average "
                        f"({t.high_branded_ctr_pct:g}%). This indicates strong performance "
                        "in branded search results.",
                    )
                )
        if non_branded_pos > t.weak_position:
            insights.append(
                Insight(
                    "performance",
                    f"Non-Branded average position ({non_branded_pos:.1f}) indicates "
                    f"significant SEO opportunities. Pages ranking beyond position "
                    f"{t.weak_position:g} may not be visible enough to drive traffic.",
                )
            )

        samples = _all_samples(result)
        top_query = max(samples, key=lambda s: s["clicks"], default=None)
        if top_query is not None:
            insights.append(
                Insight(
                    "top_query",
                    f'Top performing query "{top_query["query"]}" with {top_query["clicks"]} '
                    "clicks may benefit from dedicated content, such as a landing page or "
                    "blog post, to capitalize on its popularity.",
                )
            )

        for sample in self._conversion_candidates(samples)[:1]:
            insights.append(
                Insight(
                    "conversion_potential",
                    f'Query "{sample["query"]}" with {sample["clicks"]} clicks has a low CTR '
                    f'({sample["ctr"] * 100:.1f}%), suggesting untapped conversion potential. '
                    "Consider adding a clear call-to-action or optimizing the landing page.",
                )
            )

        backlink_path = self._backlink_candidate(result)
        if backlink_path is not None:
            insights.append(
                Insight(
                    "backlinks",
                    f"Path {backlink_path.name} with {backlink_path.total} queries and an "
                    f"average non-branded position of {non_branded_pos:.1f} could benefit "
                    "from backlink building to improve ranking and authority.",
                )
            )

        low_path = min(result.path_data, key=lambda p: p.total, default=None)
        if (
            top_branded is not None
            and low_path is not None
            and low_path.name != top_branded.name
            and low_path.total < t.low_traffic_path_queries
        ):
            insights.append(
                Insight(
                    "internal_linking",
                    f"High traffic on {top_branded.name} ({top_branded.total} queries) could "
                    f"boost low-traffic path {low_path.name} ({low_path.total} queries) via "
                    "internal linking.",
                )
            )

        languages = sorted(result.language_data, key=lambda lang: lang.total, reverse=True)
        if (
            languages
            and languages[0].total > t.language_min_queries
            and languages[0].branded < t.language_low_branded_pct
        ):
            top = languages[0]
            insights.append(
                Insight(
                    "language",
                    f"Language {top.language} ({top.total} queries) has low branded traffic "
                    f"({top.branded:.1f}%). Creating more branded content in this language "
                    "could capture this audience.",
                )
            )
        if len(languages) > 1 and languages[1].total > t.secondary_language_min_queries:
            second = languages[1]
            insights.append(
                Insight(
                    "language",
                    f"Secondary language {second.language} ({second.total} queries) represents "
                    "a significant portion of traffic. Consider localizing content for this "
                    "language to improve user engagement.",
                )
            )

        if total_rows:
            ratio = result.summary.branded_rows / total_rows
            if ratio > t.branded_dominance_ratio:
                insights.append(
                    Insight(
                        "traffic_balance",
                        f"Branded traffic dominates at {ratio * 100:.1f}% of total queries. "
                        "Brand recognition is strong but traffic relies on branded searches; "
                        "focus on increasing non-branded traffic through SEO.",
                    )
                )
            elif ratio < t.branded_weakness_ratio:
                insights.append(
                    Insight(
                        "traffic_balance",
                        f"Branded traffic is only {ratio * 100:.1f}% of total queries. "
                        "Targeted campaigns or branded content could strengthen brand awareness.",
                    )
                )

        cannibalized = _cannibalized_queries(result)
        if cannibalized:
            query, pages = cannibalized[0]
            insights.append(
                Insight(
                    "cannibalization",
                    f'Query "{query}" is landing on multiple pages ({len(pages)} URLs). '
                    "Consolidate content to a single authoritative page to avoid keyword "
                    "cannibalization.",
                )
            )

        if quality is not None and quality.health_score < t.healthy_score:
            insights.append(
                Insight(
                    "data_quality",
                    f"Data health score is {quality.health_score:.1f}. Missing values may "
                    "skew the figures above.",
                )
            )
        if result.duplicates:
            insights.append(
                Insight(
                    "data_quality",
                    f"{len(result.duplicates)} rows repeat an earlier query/page pair. "
                    "Clean duplicates before drawing conclusions.",
                )
            )

        return insights or [Insight("none", NO_INSIGHTS)]

    def recommended_actions(self, result: AggregatedResult) -> list[RecommendedAction]:
        """Recommended follow-ups, most important first within each rule."""
        t = self.thresholds
        actions: list[RecommendedAction] = []
        total_rows = result.summary.total_rows

        if result.branded.count and result.branded.metrics.ctr * 100 < t.low_branded_ctr_pct:
            actions.append(
                RecommendedAction(
                    "Low Branded CTR",
                    "Optimize titles and meta descriptions for branded queries to improve "
                    "click-through rates.",
                    Severity.HIGH,
                )
            )
        if result.non_branded.metrics.avg_position > t.weak_position:
            actions.append(
                RecommendedAction(
                    "High Non-Branded Avg Position",
                    "Target high-opportunity keywords and improve on-page SEO.",
                    Severity.HIGH,
                )
            )
        if self._backlink_candidate(result) is not None:
            actions.append(
                RecommendedAction(
                    "Backlink Opportunity",
                    "Run a backlink campaign targeting high-traffic paths to boost authority "
                    "and rankings.",
                    Severity.MEDIUM,
                )
            )
        if any(p.total < t.low_traffic_path_queries for p in result.path_data) and any(
            p.total >= t.low_traffic_path_queries for p in result.path_data
        ):
            actions.append(
                RecommendedAction(
                    "Internal Linking Opportunity",
                    "Add internal links from high-traffic pages to low-traffic pages.",
                    Severity.MEDIUM,
                )
            )
        if any(
            lang.total > t.language_min_queries and lang.branded < t.language_low_branded_pct
            for lang in result.language_data
        ):
            actions.append(
                RecommendedAction(
                    "Language Branding Opportunity",
                    "Develop branded content in languages with low branded traffic.",
                    Severity.LOW,
                )
            )
        if total_rows:
            ratio = result.summary.branded_rows / total_rows
            if ratio > t.branded_dominance_ratio:
                actions.append(
                    RecommendedAction(
                        "Over-Reliance on Branded Traffic",
                        "Invest in non-branded SEO and content marketing to diversify "
                        "traffic sources.",
                        Severity.HIGH,
                    )
                )
            elif ratio < t.branded_weakness_ratio:
                actions.append(
                    RecommendedAction(
                        "Low Branded Traffic",
                        "Launch a branding campaign to increase branded search volume.",
                        Severity.MEDIUM,
                    )
                )
        for sample in self._conversion_candidates(_all_samples(result)):
            actions.append(
                RecommendedAction(
                    "Conversion Potential",
                    f'Optimize the landing page for "{sample["query"]}" with a strong CTA.',
                    Severity.HIGH,
                )
            )
        for query, _ in _cannibalized_queries(result):
            actions.append(
                RecommendedAction(
                    "Keyword Cannibalization",
                    f'Consolidate content for "{query}" into a single page.',
                    Severity.MEDIUM,
                )
            )
        return actions

    def _conversion_candidates(self, samples: list[dict[str, Any]]) -> list[dict[str, Any]]:
        t = self.thresholds
        candidates = [
            s
            for s in samples
            if s["clicks"] > t.conversion_min_clicks and s["ctr"] * 100 < t.conversion_max_ctr_pct
        ]
        return sorted(candidates, key=lambda s: s["impressions"], reverse=True)

    def _backlink_candidate(self, result: AggregatedResult) -> PathStat | None:
        t = self.thresholds
        if result.non_branded.metrics.avg_position <= t.weak_position:
            return None
        for path in result.path_data:
            if path.total > t.backlink_min_queries and path.branded > t.backlink_min_branded_pct:
                return path
        return None


def _all_samples(result: AggregatedResult) -> list[dict[str, Any]]:
    return result.branded.samples + result.non_branded.samples


def _cannibalized_queries(result: AggregatedResult) -> list[tuple[Any, list[Any]]]:
    """Queries landing on more than one distinct page, most pages first."""
    pages: dict[Any, list[Any]] = defaultdict(list)
    for row in result.data:
        query, page = row.get(RowKey.QUERY), row.get(RowKey.PAGE)
        if query and page and page not in pages[query]:
            pages[query].append(page)
    found = [(query, urls) for query, urls in pages.items() if len(urls) > 1]
    return sorted(found, key=lambda item: len(item[1]), reverse=True)
