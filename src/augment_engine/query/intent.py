"""Keyword-based intent detection and slot extraction for query routing.

Decides which domain a query belongs to, whether a general query needs a
web search, and pulls out the parameters each domain needs (location for
weather, time range for calendar, league for sports, title and time hint
for reminder creation).
"""

from __future__ import annotations

import re

from augment_engine.models.domain import (
    CalendarTimeRange,
    Query,
    QueryDomain,
    ReminderDetails,
    SearchIntent,
)
from augment_engine.observability.logger import get_logger
from augment_engine.sports.leagues import SportsLeague

logger = get_logger("intent")


def _phrases(phrases: list[str]) -> re.Pattern[str]:
    """Compile a prefix-anchored, case-insensitive alternation of literal phrases.

    Phrases must start on a word boundary but may run on into an inflection,
    so "rain" matches "raining" and "google" matches "googled" while "brain"
    stays clear of "rain".
    """
    alternation = "|".join(re.escape(p) for p in phrases)
    return re.compile(rf"\b(?:{alternation})", re.IGNORECASE)


# Explicit web search requests
DEFINITE_TRIGGERS = [
    "search for",
    "search the web",
    "look up online",
    "look up",
    "google",
    "find online",
    "what's the news",
    "what is the news",
    "what's in the news",
    "what is in the news",
    "latest news",
    "current news",
    "recent news",
    "news about",
    "news on",
    "the news",
    "any news",
    "today's news",
]

TEMPORAL_KEYWORDS = [
    "today",
    "tomorrow",
    "yesterday",
    "next",
    "upcoming",
    "this week",
    "this month",
    "this year",
    "recent",
    "recently",
    "latest",
    "current",
    "currently",
    "now",
    "right now",
    "2024",
    "2025",
    "2026",
    "2027",
]

CURRENT_EVENT_PHRASES = [
    "what happened",
    "what's happening",
    "what is happening",
    "who won",
    "who is winning",
    "stock price",
    "weather in",
    "weather for",
    "score of",
    "how much is",
    "exchange rate",
    "price of",
    "breaking news",
    "live update",
    "next game",
    "next match",
    "playing next",
    "schedule",
    "fixture",
    "standings",
    "results",
]

# Conversational or tutorial requests never go to the web
EXCLUSION_PHRASES = [
    "tell me about yourself",
    "what can you do",
    "help me write",
    "write me",
    "explain to me",
    "explain how",
    "explain what",
    "how do i code",
    "how do i program",
    "summarize this",
    "translate this",
    "translate to",
    "what do you think",
    "in your opinion",
    "can you help me",
    "teach me",
    "tell me a joke",
    "tell me a story",
]

QUESTION_STARTS = [
    "what", "who", "where", "when", "why", "how",
    "is there", "are there", "did", "does", "has", "have",
]

# Longest phrasing first so "can you search for" wins over "search for"
SEARCH_PREFIXES = [
    "can you search for",
    "please search for",
    "search for",
    "look up",
    "find me",
    "tell me about",
    "what is",
    "what are",
    "who is",
    "who are",
]

WEATHER_KEYWORDS = [
    "weather", "temperature", "forecast", "rain", "snow", "sunny", "cloudy",
    "humid", "humidity", "wind", "storm", "precipitation",
]

SPORTS_KEYWORDS = [
    "score", "scores", "game", "match", "standings", "fixture", "who won",
    "who is winning", "playing next", "next game", "next match",
]

CALENDAR_KEYWORDS = [
    "schedule", "calendar", "meeting", "meetings", "appointment",
    "appointments", "event", "events", "what's on", "what is on", "do i have",
    "am i free", "am i busy", "my day", "my schedule", "my calendar",
    "planned for", "happening today", "happening tomorrow",
]

REMINDER_KEYWORDS = [
    "remind me", "reminder", "reminders", "to-do", "todo", "to do list",
    "task", "tasks", "don't forget", "need to remember", "my reminders",
    "pending tasks", "what do i need to",
]

WEEK_PHRASES = [
    "this week", "the week", "next week", "next few days", "coming days", "coming week",
]

REMINDER_CREATION_PHRASES = [
    "remind me to",
    "remind me about",
    "set a reminder",
    "create a reminder",
    "add a reminder",
    "don't let me forget",
    "make sure i",
]

REMINDER_PREFIXES = [
    "remind me to",
    "remind me about",
    "set a reminder to",
    "set a reminder for",
    "create a reminder to",
    "add a reminder to",
    "don't let me forget to",
    "make sure i",
]

# (pattern, normalized hint); a None hint means "use the matched text"
REMINDER_TIME_PATTERNS: list[tuple[re.Pattern[str], str | None]] = [
    (re.compile(r"\btomorrow\b", re.I), "tomorrow"),
    (re.compile(r"\btonight\b", re.I), "tonight"),
    (re.compile(r"\bthis evening\b", re.I), "this evening"),
    (re.compile(r"\bthis afternoon\b", re.I), "this afternoon"),
    (re.compile(r"\bthis morning\b", re.I), "this morning"),
    (re.compile(r"\bnext week\b", re.I), "next week"),
    (re.compile(r"\bin an hour\b", re.I), "in 1 hour"),
    (re.compile(r"\bin \d+ hours?\b", re.I), None),
    (re.compile(r"\bat \d{1,2}(?::\d{2})?\s*(?:am|pm)?\b", re.I), None),
]

LOCATION_PATTERNS = [
    re.compile(
        r"weather (?:in|for|at) ([\w\s,]+?)"
        r"(?:\?|$|\.|!|\bthis\b|\btoday\b|\btomorrow\b|\bweekend\b|\bweek\b|\bright\b|\bnow\b|\bcurrently\b)",
        re.I,
    ),
    re.compile(r"\b(?:in|for|at) ([\w\s,]+?) weather\b", re.I),
    re.compile(r"([\w\s,]+?) weather (?:today|tomorrow|this|forecast|right|now)\b", re.I),
    re.compile(
        r"what(?:'s| is) the weather (?:in|for|at|like in) ([\w\s,]+?)"
        r"(?:\?|$|\.|!|\bright\b|\bnow\b|\btoday\b|\btomorrow\b)",
        re.I,
    ),
]

LOCATION_NOISE = re.compile(
    r"\b(?:right now|today|tomorrow|weekend|week|now|right|this|the|like|"
    r"currently|current|what's|whats|what|is|how's|how)\b",
    re.I,
)

_definite_re = _phrases(DEFINITE_TRIGGERS)
_temporal_re = _phrases(TEMPORAL_KEYWORDS)
_current_event_re = _phrases(CURRENT_EVENT_PHRASES)
_exclusion_re = _phrases(EXCLUSION_PHRASES)
_weather_re = _phrases(WEATHER_KEYWORDS)
_sports_re = _phrases(SPORTS_KEYWORDS)
_calendar_re = _phrases(CALENDAR_KEYWORDS)
_reminder_re = _phrases(REMINDER_KEYWORDS)
_week_re = _phrases(WEEK_PHRASES)
_tomorrow_re = _phrases(["tomorrow"])
_reminder_creation_re = _phrases(REMINDER_CREATION_PHRASES)

# Checked in this order; first match wins
_DOMAIN_RULES = [
    (QueryDomain.REMINDERS, _reminder_re),
    (QueryDomain.CALENDAR, _calendar_re),
    (QueryDomain.WEATHER, _weather_re),
    (QueryDomain.SPORTS, _sports_re),
]


class IntentClassifier:
    def classify(self, text: str) -> Query:
        """Classify ``text`` and extract the slots its domain needs."""
        domain = self.classify_domain(text)
        query = Query(text=text, domain=domain)

        if domain == QueryDomain.WEATHER:
            query = Query(text=text, domain=domain, location=self.extract_location(text))
        elif domain == QueryDomain.CALENDAR:
            query = Query(text=text, domain=domain, time_range=self.extract_time_range(text))
        elif domain == QueryDomain.SPORTS:
            query = Query(text=text, domain=domain, league=SportsLeague.detect(text))
        elif domain == QueryDomain.REMINDERS:
            creating = self.is_reminder_creation(text)
            query = Query(
                text=text,
                domain=domain,
                is_reminder_creation=creating,
                reminder=self.extract_reminder_details(text) if creating else None,
            )

        logger.debug("query_classified", domain=domain.value)
        return query

    @staticmethod
    def classify_domain(text: str) -> QueryDomain:
        for domain, pattern in _DOMAIN_RULES:
            if pattern.search(text):
                return domain
        return QueryDomain.GENERAL

    @staticmethod
    def is_excluded(text: str) -> bool:
        return _exclusion_re.search(text) is not None

    @staticmethod
    def detect_general_intent(text: str) -> SearchIntent:
        if _exclusion_re.search(text):
            return SearchIntent.NO_SEARCH_NEEDED

        if _definite_re.search(text):
            return SearchIntent.DEFINITELY_NEEDS_SEARCH

        # Each category counts at most once; two indicators are needed.
        indicators = 0
        if _temporal_re.search(text):
            indicators += 1
        if _current_event_re.search(text):
            indicators += 1
        lowered = text.lower().lstrip()
        if any(
            lowered.startswith(start + " ") or lowered.startswith(start + "'")
            for start in QUESTION_STARTS
        ):
            indicators += 1

        if indicators >= 2:
            return SearchIntent.PROBABLY_NEEDS_SEARCH
        return SearchIntent.NO_SEARCH_NEEDED

    @staticmethod
    def extract_search_query(text: str) -> str:
        """Strip a conversational prefix such as "can you search for"."""
        stripped = text.strip()
        lowered = stripped.lower()
        for prefix in SEARCH_PREFIXES:
            if lowered.startswith(prefix):
                stripped = stripped[len(prefix):]
                break
        return stripped.strip()

    @staticmethod
    def extract_location(text: str) -> str | None:
        """Extract a lower-cased location from weather phrasing, or None."""
        lowered = text.lower()
        for pattern in LOCATION_PATTERNS:
            match = pattern.search(lowered)
            if not match:
                continue
            location = LOCATION_NOISE.sub(" ", match.group(1))
            location = re.sub(r"\s+", " ", location).strip(" ?.,!")
            if len(location) > 1:
                return location
        return None

    @staticmethod
    def extract_time_range(text: str) -> CalendarTimeRange:
        if _tomorrow_re.search(text):
            return CalendarTimeRange.TOMORROW
        if _week_re.search(text):
            return CalendarTimeRange.THIS_WEEK
        return CalendarTimeRange.TODAY

    @staticmethod
    def is_reminder_creation(text: str) -> bool:
        return _reminder_creation_re.search(text) is not None

    @staticmethod
    def extract_reminder_details(text: str) -> ReminderDetails:
        title = text.strip()
        lowered = title.lower()
        for prefix in REMINDER_PREFIXES:
            if lowered.startswith(prefix):
                title = title[len(prefix):].strip()
                break

        time_hint = None
        for pattern, hint in REMINDER_TIME_PATTERNS:
            match = pattern.search(title)
            if match:
                time_hint = hint or match.group(0).strip().lower()
                title = title[: match.start()] + title[match.end():]
                break

        title = re.sub(r"\s+", " ", title).strip(" .,!")
        return ReminderDetails(title=title, time_hint=time_hint)
