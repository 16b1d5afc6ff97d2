"""Few-shot LLM classification of search need and expected answer length."""

from __future__ import annotations

from augment_engine.models.domain import DetailLevel
from augment_engine.observability.logger import get_logger
from augment_engine.protocols.llm import TextGenerator

logger = get_logger("llm_classifier")

SEARCH_SYSTEM = "You are a classifier. Only respond with YES or NO."

SEARCH_PROMPT = """Does this question require current internet data to answer?

"What is 2+2?" → NO
"Explain photosynthesis" → NO
"What's the weather today?" → YES
"What's the temperature tomorrow?" → YES
"Latest news about Apple" → YES
"Next Lakers game?" → YES
"How do I cook pasta?" → NO

"{query}" →"""

DETAIL_SYSTEM = "You are a classifier. Only respond with BRIEF or DETAILED."

DETAIL_PROMPT = """Does this question need a brief answer (single fact) or detailed answer (multiple facts)?

"When is the next Lakers game?" → BRIEF
"What time does the store close?" → BRIEF
"Who won the Super Bowl?" → BRIEF
"What's the weather like?" → DETAILED
"Tell me about the weather today" → DETAILED
"What's happening in the news?" → DETAILED
"How is the traffic?" → DETAILED
"What should I wear today?" → DETAILED

"{query}" →"""


class LLMIntentClassifier:
    """Implements ``IntentLLM`` on top of any text generator.

    Generation failures never propagate: a failed search check means "no
    search" and a failed detail check means ``DetailLevel.DETAILED``.
    """

    def __init__(self, generator: TextGenerator, max_tokens: int = 8) -> None:
        self._generator = generator
        self._max_tokens = max_tokens

    async def needs_web_search(self, query: str) -> bool:
        try:
            answer = await self._generator.generate(
                SEARCH_PROMPT.format(query=query),
                system=SEARCH_SYSTEM,
                temperature=0.1,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.warning("search_classification_failed", error=str(e))
            return False

        needs_search = "YES" in answer.upper()
        logger.info("search_classified", needs_search=needs_search)
        return needs_search

    async def classify_response_detail(self, query: str) -> DetailLevel:
        try:
            answer = await self._generator.generate(
                DETAIL_PROMPT.format(query=query),
                system=DETAIL_SYSTEM,
                temperature=0.1,
                max_tokens=self._max_tokens,
            )
        except Exception as e:
            logger.warning("detail_classification_failed", error=str(e))
            return DetailLevel.DETAILED

        level = DetailLevel.BRIEF if "BRIEF" in answer.upper() else DetailLevel.DETAILED
        logger.info("detail_classified", detail_level=level.value)
        return level
