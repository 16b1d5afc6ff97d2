"""Render an ExternalContext into a bounded block for prompt injection.

Output is deterministic for a given (context, query, detail level) and never
exceeds the configured cap for its detail level. The trailing instruction
line is always kept whole; the body is truncated to make room for it.
"""

from __future__ import annotations

from augment_engine.config.settings import Settings
from augment_engine.formatting.renderers import extract_sources
from augment_engine.models.domain import (
    ContextCategory,
    ContextItem,
    DetailLevel,
    ExternalContext,
    QueryDomain,
)

BRIEF_TITLE_CHARS = 60
BRIEF_DESCRIPTION_CHARS = 150
BRIEF_MAX_LINES = 5
DETAILED_MAX_LINES = 15

# (category, max items, max chars per item), in priority order
CATEGORY_BUCKETS: list[tuple[ContextCategory, int, int]] = [
    (ContextCategory.FAQ, 2, 350),
    (ContextCategory.DIRECT_ANSWER, 1, 300),
    (ContextCategory.NEWS, 2, 250),
    (ContextCategory.LOCATION, 2, 200),
    (ContextCategory.DISCUSSION, 1, 200),
    (ContextCategory.GENERAL, 3, 250),
]

_BUCKET_LABELS = {
    ContextCategory.FAQ: "FAQ",
    ContextCategory.DIRECT_ANSWER: "Direct Answer",
    ContextCategory.NEWS: "News",
    ContextCategory.LOCATION: "Location",
    ContextCategory.DISCUSSION: "Discussion",
    ContextCategory.GENERAL: "Web",
}

_INSTANT = (ContextCategory.DIRECT_ANSWER, ContextCategory.FAQ)

DATA_HEADER = "[DO NOT USE TOOLS - DATA BELOW]"


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    if limit <= 3:
        return text[:limit]
    return text[: limit - 3].rstrip() + "..."


class ContextFormatter:
    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self._brief_cap = settings.brief_context_max_chars
        self._detailed_cap = settings.detailed_context_max_chars
        self._max_items = settings.detailed_max_items

    def cap_for(self, detail_level: DetailLevel) -> int:
        return self._brief_cap if detail_level == DetailLevel.BRIEF else self._detailed_cap

    def format(
        self, context: ExternalContext, query: str, detail_level: DetailLevel
    ) -> str:
        if context.domain == QueryDomain.GENERAL:
            if detail_level == DetailLevel.BRIEF:
                body, instruction = self._brief_search(context, query)
            else:
                body, instruction = self._detailed_search(context, query)
        else:
            body, instruction = self._data_block(context, query, detail_level)
        return self._fit(body, instruction, self.cap_for(detail_level))

    extract_sources = staticmethod(extract_sources)

    @staticmethod
    def brief_summary(count: int) -> str:
        """One-line summary for the UI after a search completes."""
        if count == 0:
            return "No results found"
        if count == 1:
            return "Found 1 result"
        return f"Found {count} results"

    def _brief_search(self, context: ExternalContext, query: str) -> tuple[str, str]:
        instruction = (
            "Answer in one or two sentences using only the result above. "
            f"Do not call any tools. Question: {query}"
        )
        if not context.items:
            return "[SEARCH RESULT]\nNo results found.", instruction

        best = next((i for i in context.items if i.category in _INSTANT), context.items[0])
        label = _BUCKET_LABELS.get(best.category, "Web")
        body = (
            f"[{label}] {truncate(best.title, BRIEF_TITLE_CHARS)}\n"
            f"{truncate(best.text, BRIEF_DESCRIPTION_CHARS)}"
        )
        return body, instruction

    def _detailed_search(self, context: ExternalContext, query: str) -> tuple[str, str]:
        selected = self._select_items(context.items)
        has_direct = any(item.category in _INSTANT for item, _ in selected)

        parts = ["[SEARCH RESULTS]"]
        if not selected:
            parts.append("No results found.")
        for item, limit in selected:
            label = _BUCKET_LABELS.get(item.category, "Web")
            parts.append(f"[{label}] {item.title}\n{truncate(item.text, limit)}")
        parts.append("[END RESULTS]")

        if has_direct:
            instruction = (
                "Lead with the direct answer above, then add supporting detail from "
                f"the other results. Do not call any tools. Question: {query}"
            )
        else:
            instruction = (
                "Answer using only the search results above and mention which "
                f"result each fact comes from. Do not call any tools. Question: {query}"
            )
        return "\n\n".join(parts), instruction

    def _select_items(self, items: list[ContextItem]) -> list[tuple[ContextItem, int]]:
        selected: list[tuple[ContextItem, int]] = []
        for category, max_items, limit in CATEGORY_BUCKETS:
            bucket = [item for item in items if item.category == category][:max_items]
            for item in bucket:
                if len(selected) >= self._max_items:
                    return selected
                selected.append((item, limit))
        return selected

    def _data_block(
        self, context: ExternalContext, query: str, detail_level: DetailLevel
    ) -> tuple[str, str]:
        max_lines = BRIEF_MAX_LINES if detail_level == DetailLevel.BRIEF else DETAILED_MAX_LINES
        lines = [f"• {item.text}" for item in context.items[:max_lines]]
        hidden = len(context.items) - max_lines
        if hidden > 0:
            lines.append(f"... and {hidden} more")

        heading = context.heading or context.domain.value.title()
        body = f"{DATA_HEADER}\n\n[{heading.upper()}]\n" + "\n".join(lines)
        instruction = (
            "Use only the data above to answer. It is already current, so do not "
            f"call any tools. Question: {query}"
        )
        return body, instruction

    @staticmethod
    def _fit(body: str, instruction: str, cap: int) -> str:
        instruction = truncate(instruction, cap // 2)
        budget = max(cap - len(instruction) - 2, 0)
        return f"{truncate(body, budget)}\n\n{instruction}"
