"""PII detection and redaction applied before a query leaves the device."""

from __future__ import annotations

import re

from augment_engine.models.domain import SanitizationResult
from augment_engine.observability.logger import get_logger

logger = get_logger("sanitizer")

MIN_QUERY_LENGTH = 3

# Applied in order; each kind is recorded once per sanitize() call.
PII_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("email", re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")),
    ("phone", re.compile(r"(?:\+?1[-.\s]?)?\(?\b[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}\b")),
    ("ssn", re.compile(r"\b\d{3}-?\d{2}-?\d{4}\b")),
    ("credit_card", re.compile(r"\b(?:\d{4}[-\s]?){3}\d{4}\b")),
    ("ip_address", re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b")),
    (
        "address",
        re.compile(
            r"\b\d{1,5}\s+\w+\s+(?:street|st|avenue|ave|road|rd|drive|dr|lane|ln|"
            r"way|court|ct|boulevard|blvd|circle|cir)\b",
            re.IGNORECASE,
        ),
    ),
    ("zipcode", re.compile(r"\b\d{5}(?:-\d{4})?\b")),
]

NAME_CONTEXT_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\bmy name is \w+", re.IGNORECASE),
    re.compile(r"\bi am (?!a\b|an\b|the\b|not\b)\w+", re.IGNORECASE),
    re.compile(r"\bi'm (?!a\b|an\b|the\b|not\b)\w+", re.IGNORECASE),
    re.compile(r"\bcall me \w+", re.IGNORECASE),
    re.compile(r"\bthis is \w+ speaking\b", re.IGNORECASE),
]

SENSITIVE_TOPICS = [
    "my password",
    "my passcode",
    "my pin",
    "my salary",
    "my income",
    "my bank account",
    "my account number",
    "my social security",
    "my diagnosis",
    "my medical",
    "my health condition",
    "my medication",
    "my prescription",
    "my therapist",
    "my psychiatrist",
    "my lawyer",
    "my attorney",
    "my home address",
    "my address is",
    "i live at",
    "my credit card",
    "my debit card",
]

_QUICK_PII_PATTERNS = [
    re.compile(r"@[a-zA-Z0-9.-]+\.[a-zA-Z]"),
    re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}"),
    re.compile(r"\d{3}-?\d{2}-?\d{4}"),
]

_WHITESPACE = re.compile(r"\s+")


class QuerySanitizer:
    def sanitize(self, text: str) -> SanitizationResult:
        if self._mentions_sensitive_topic(text):
            return self._sensitive(text)

        kinds: list[str] = []
        sanitized = text
        # Redaction can expose a new match (e.g. digits joined across a removed
        # span), so repeat until the text is stable.
        while True:
            redacted = self._redact_once(sanitized, kinds)
            if redacted == sanitized:
                break
            sanitized = redacted

        # Removing a span can join words into a sensitive phrase.
        if self._mentions_sensitive_topic(sanitized):
            return self._sensitive(text)

        should_proceed = len(sanitized) >= MIN_QUERY_LENGTH
        if kinds:
            logger.info("sanitize_redacted", pii_kinds=kinds, should_proceed=should_proceed)

        return SanitizationResult(
            original_text=text,
            sanitized_text=sanitized,
            contained_pii=bool(kinds),
            pii_kinds=kinds,
            should_proceed=should_proceed,
        )

    @classmethod
    def might_contain_pii(cls, text: str) -> bool:
        """Quick check without full sanitization."""
        if cls._mentions_sensitive_topic(text):
            return True
        return any(p.search(text) for p in _QUICK_PII_PATTERNS)

    @staticmethod
    def _mentions_sensitive_topic(text: str) -> bool:
        lowered = text.lower()
        return any(topic in lowered for topic in SENSITIVE_TOPICS)

    @staticmethod
    def _sensitive(text: str) -> SanitizationResult:
        logger.info("sanitize_sensitive_topic")
        return SanitizationResult(
            original_text=text,
            sanitized_text="",
            contained_pii=True,
            pii_kinds=["sensitive_topic"],
            should_proceed=False,
        )

    @staticmethod
    def _redact_once(text: str, kinds: list[str]) -> str:
        for kind, pattern in PII_PATTERNS:
            if pattern.search(text):
                if kind not in kinds:
                    kinds.append(kind)
                text = pattern.sub("", text)

        for pattern in NAME_CONTEXT_PATTERNS:
            if pattern.search(text):
                if "name" not in kinds:
                    kinds.append("name")
                text = pattern.sub("", text)

        return _WHITESPACE.sub(" ", text).strip()
