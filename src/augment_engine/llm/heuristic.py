"""Keyword-only stand-in for the LLM classifier when no model is configured."""

from __future__ import annotations

from augment_engine.models.domain import DetailLevel, SearchIntent
from augment_engine.query.intent import IntentClassifier


class HeuristicIntentLLM:
    """Answers ``IntentLLM`` questions from the keyword classifier alone."""

    def __init__(self, classifier: IntentClassifier | None = None) -> None:
        self._classifier = classifier or IntentClassifier()

    async def needs_web_search(self, query: str) -> bool:
        return self._classifier.detect_general_intent(query) != SearchIntent.NO_SEARCH_NEEDED

    async def classify_response_detail(self, query: str) -> DetailLevel:
        return DetailLevel.DETAILED
