"""Branded query detection."""

import time

import regex
from loguru import logger

from ..constants import (
    PATTERN_CHUNK_SIZE,
    PATTERN_MAX_STEPS,
    PATTERN_TIME_BUDGET_SECONDS,
    LogMessage,
)
from ..models import ClassificationConfig


class PatternBudgetExceeded(Exception):
    """Raised when a custom pattern runs out of steps or time."""


class BrandMatcher:
    """Decides whether a search query is branded.

    In term mode a query is branded when any configured brand term is a
    substring of it. In pattern mode the configured regular expression is
    searched for instead, under a budget: the query is first scanned in
    fixed-size chunks, each scan costing one step, and every search runs with
    the remaining share of a wall-clock budget. Running out of steps or time,
    or a pattern that fails to compile, classifies the query as not branded.

    The budget is a heuristic guard against catastrophic backtracking, not a
    guarantee about what a pattern matches.

    Attributes:
        config: Classification settings of the current run.
        chunk_size: Number of characters searched per step.
        max_steps: Step ceiling per query.
        time_budget: Seconds of pattern evaluation allowed per query.
    """

    def __init__(
        self,
        *,
        config: ClassificationConfig,
        chunk_size: int = PATTERN_CHUNK_SIZE,
        max_steps: int = PATTERN_MAX_STEPS,
        time_budget: float = PATTERN_TIME_BUDGET_SECONDS,
    ):
        self.config = config
        self.chunk_size = chunk_size
        self.max_steps = max_steps
        self.time_budget = time_budget
        self._terms = config.terms
        self._pattern = self._compile() if self.uses_pattern else None

    @property
    def uses_pattern(self) -> bool:
        return self.config.use_custom_pattern and bool(self.config.custom_pattern)

    def _compile(self) -> "regex.Pattern | None":
        flags = 0 if self.config.case_sensitive else regex.IGNORECASE
        try:
            return regex.compile(self.config.custom_pattern, flags)
        except regex.error as e:
            logger.warning(LogMessage.PATTERN_INVALID.format(e))
            return None

    def is_branded(self, query: object) -> bool:
        """Classify a single query.

        Args:
            query: The search query. Non-string values are compared by their text.

        Returns:
            bool: True if the query is branded.
        """
        if query is None or query == "":
            return False
        text = str(query)

        if self.uses_pattern:
            if self._pattern is None:
                return False
            try:
                return self._bounded_search(text)
            except (PatternBudgetExceeded, TimeoutError) as e:
                logger.warning(LogMessage.PATTERN_ABORTED.format(e))
                return False

        if not self.config.case_sensitive:
            text = text.lower()
        return any(term in text for term in self._terms)

    def _bounded_search(self, text: str) -> bool:
        deadline = time.monotonic() + self.time_budget
        steps = 0

        for start in range(0, len(text), self.chunk_size):
            self._pattern.search(
                text[start : start + self.chunk_size], timeout=_remaining(deadline)
            )
            steps += 1
            if steps > self.max_steps:
                raise PatternBudgetExceeded(
                    f"exceeded {self.max_steps} steps on a {len(text)} character query"
                )

        return self._pattern.search(text, timeout=_remaining(deadline)) is not None


def _remaining(deadline: float) -> float:
    remaining = deadline - time.monotonic()
    if remaining <= 0:
        raise PatternBudgetExceeded("time budget exhausted")
    return remaining
