"""Tests for keyword intent classification and slot extraction."""

import pytest

from augment_engine.models.domain import CalendarTimeRange, QueryDomain, SearchIntent
from augment_engine.query.intent import IntentClassifier
from augment_engine.sports.leagues import SportsLeague


@pytest.fixture
def classifier():
    return IntentClassifier()


@pytest.mark.parametrize(
    "text, domain",
    [
        ("weather in Boston", QueryDomain.WEATHER),
        ("Will it rain tomorrow?", QueryDomain.WEATHER),
        ("What's on my calendar tomorrow", QueryDomain.CALENDAR),
        ("do I have any meetings today", QueryDomain.CALENDAR),
        ("show my reminders", QueryDomain.REMINDERS),
        ("who won the NBA game last night", QueryDomain.SPORTS),
        ("what is the capital of France", QueryDomain.GENERAL),
    ],
)
def test_classify_domain(classifier, text, domain):
    assert classifier.classify_domain(text) == domain


def test_reminders_outrank_weather(classifier):
    assert classifier.classify_domain("remind me to check the weather") == QueryDomain.REMINDERS


def test_calendar_outranks_sports(classifier):
    assert classifier.classify_domain("is the game on my calendar") == QueryDomain.CALENDAR


def test_keywords_anchor_at_word_start(classifier):
    # "rain" inside "brain" is not a weather query
    assert classifier.classify_domain("how does the brain store memories") == QueryDomain.GENERAL


@pytest.mark.parametrize(
    "text",
    [
        "is it raining in Boston",
        "is it snowing tomorrow",
        "will it be windy today",
        "any storms tonight",
    ],
)
def test_inflected_weather_words_route_to_weather(classifier, text):
    assert classifier.classify_domain(text) == QueryDomain.WEATHER


def test_inflected_trigger_is_definite(classifier):
    assert classifier.detect_general_intent("who googled it first") == (
        SearchIntent.DEFINITELY_NEEDS_SEARCH
    )


@pytest.mark.parametrize(
    "text",
    [
        "tell me a joke about the latest news",
        "explain how search for news works",
        "help me write a post about what happened today",
        "what do you think about the current news",
    ],
)
def test_exclusion_overrides_triggers(classifier, text):
    assert classifier.detect_general_intent(text) == SearchIntent.NO_SEARCH_NEEDED
    assert classifier.is_excluded(text)


@pytest.mark.parametrize(
    "text",
    [
        "search for cheap flights to Denver",
        "google the population of Peru",
        "what's the news in Canada",
        "any news about the Mars mission",
        "LATEST NEWS on the election",
    ],
)
def test_definite_triggers(classifier, text):
    assert classifier.detect_general_intent(text) == SearchIntent.DEFINITELY_NEEDS_SEARCH


def test_two_indicators_probably_need_search(classifier):
    # temporal + current event + question word
    assert classifier.detect_general_intent("what happened today in Paris") == (
        SearchIntent.PROBABLY_NEEDS_SEARCH
    )
    # current event + question word
    assert classifier.detect_general_intent("how much is a Tesla") == (
        SearchIntent.PROBABLY_NEEDS_SEARCH
    )


def test_one_indicator_is_not_enough(classifier):
    assert classifier.detect_general_intent("what is a noun") == SearchIntent.NO_SEARCH_NEEDED
    assert classifier.detect_general_intent("I feel good today") == SearchIntent.NO_SEARCH_NEEDED


def test_repeated_temporal_keywords_count_once(classifier):
    assert classifier.detect_general_intent("today now currently latest") == (
        SearchIntent.NO_SEARCH_NEEDED
    )


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Can you search for the best pizza in town", "the best pizza in town"),
        ("search for Boston news", "Boston news"),
        ("Look up train times", "train times"),
        ("who is the mayor of Chicago", "the mayor of Chicago"),
        ("latest news on rockets", "latest news on rockets"),
    ],
)
def test_extract_search_query(classifier, text, expected):
    assert classifier.extract_search_query(text) == expected


@pytest.mark.parametrize(
    "text, location",
    [
        ("weather in Boston", "boston"),
        ("What's the weather in New York today?", "new york"),
        ("what is the weather like in Paris right now", "paris"),
        ("weather for San Francisco, CA this weekend", "san francisco, ca"),
        ("in Tokyo weather", "tokyo"),
        ("Chicago weather today", "chicago"),
    ],
)
def test_extract_location(classifier, text, location):
    assert classifier.extract_location(text) == location


@pytest.mark.parametrize(
    "text",
    ["weather", "what's the weather like", "weather in a"],
)
def test_extract_location_none(classifier, text):
    assert classifier.extract_location(text) is None


@pytest.mark.parametrize(
    "text, time_range",
    [
        ("what's on my calendar", CalendarTimeRange.TODAY),
        ("meetings tomorrow", CalendarTimeRange.TOMORROW),
        ("what do I have this week", CalendarTimeRange.THIS_WEEK),
        ("events over the next few days", CalendarTimeRange.THIS_WEEK),
    ],
)
def test_extract_time_range(classifier, text, time_range):
    assert classifier.extract_time_range(text) == time_range


def test_classify_weather_scenario(classifier):
    query = classifier.classify("weather in Boston")
    assert query.domain == QueryDomain.WEATHER
    assert query.location == "boston"


def test_classify_reminder_creation_scenario(classifier):
    query = classifier.classify("remind me to call mom")
    assert query.domain == QueryDomain.REMINDERS
    assert query.is_reminder_creation
    assert query.reminder.title == "call mom"
    assert query.reminder.time_hint is None


@pytest.mark.parametrize(
    "text, title, hint",
    [
        ("remind me to buy milk tomorrow", "buy milk", "tomorrow"),
        ("Remind me to stretch in 2 hours", "stretch", "in 2 hours"),
        ("remind me to call the dentist at 3pm", "call the dentist", "at 3pm"),
        ("set a reminder to water plants tonight", "water plants", "tonight"),
        ("remind me about the report in an hour", "the report", "in 1 hour"),
    ],
)
def test_extract_reminder_details(classifier, text, title, hint):
    details = classifier.extract_reminder_details(text)
    assert details.title == title
    assert details.time_hint == hint


def test_reminder_listing_is_not_creation(classifier):
    query = classifier.classify("what are my reminders")
    assert query.domain == QueryDomain.REMINDERS
    assert not query.is_reminder_creation
    assert query.reminder is None


def test_classify_sports_detects_league(classifier):
    query = classifier.classify("NBA scores tonight")
    assert query.domain == QueryDomain.SPORTS
    assert query.league == SportsLeague.NBA


def test_classify_calendar_time_range(classifier):
    query = classifier.classify("any appointments tomorrow")
    assert query.domain == QueryDomain.CALENDAR
    assert query.time_range == CalendarTimeRange.TOMORROW
