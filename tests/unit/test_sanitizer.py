"""Tests for PII redaction and sensitive-topic blocking."""

import pytest

from augment_engine.query.sanitizer import QuerySanitizer


@pytest.fixture
def sanitizer():
    return QuerySanitizer()


SAMPLES = [
    "my SSN is 123-45-6789, search for Boston news",
    "email john.doe@example.com about the concert tickets",
    "call 555-123-4567 or 555.987.6543 for pizza deals",
    "my name is Alice and I live in 90210, find restaurants",
    "card 4111 1111 1111 1111 was declined, why",
    "server 192.168.1.20 is down, search outages",
    "deliver to 42 Main Street please",
    "what is my password for gmail",
    "latest Python release",
    "call me Bob",
    "",
]


def test_ssn_scenario_redacts_and_proceeds(sanitizer):
    result = sanitizer.sanitize("my SSN is 123-45-6789, search for Boston news")
    assert result.contained_pii
    assert result.pii_kinds == ["ssn"]
    assert "123-45-6789" not in result.sanitized_text
    assert "Boston news" in result.sanitized_text
    assert result.should_proceed


def test_email_redacted(sanitizer):
    result = sanitizer.sanitize("email john.doe@example.com about the concert tickets")
    assert result.pii_kinds == ["email"]
    assert result.sanitized_text == "email about the concert tickets"


def test_multiple_kinds_removed_in_one_call(sanitizer):
    text = "reach me at jane@mail.org or 555-123-4567 near 10001"
    result = sanitizer.sanitize(text)
    assert set(result.pii_kinds) == {"email", "phone", "zipcode"}
    assert "@" not in result.sanitized_text
    assert "555" not in result.sanitized_text
    assert "10001" not in result.sanitized_text


def test_every_instance_removed(sanitizer):
    result = sanitizer.sanitize("call 555-123-4567 or 555.987.6543 for pizza deals")
    assert result.pii_kinds == ["phone"]
    assert result.sanitized_text == "call or for pizza deals"


def test_kind_recorded_once(sanitizer):
    result = sanitizer.sanitize("a@b.com and c@d.org are both mine")
    assert result.pii_kinds == ["email"]


def test_street_address_redacted(sanitizer):
    result = sanitizer.sanitize("deliver to 42 Main Street please")
    assert "address" in result.pii_kinds
    assert result.sanitized_text == "deliver to please"


def test_ip_address_redacted(sanitizer):
    result = sanitizer.sanitize("server 192.168.1.20 is down, search outages")
    assert "ip_address" in result.pii_kinds
    assert "192.168" not in result.sanitized_text


def test_name_context_redacted(sanitizer):
    result = sanitizer.sanitize("my name is Alice, find vegan recipes")
    assert "name" in result.pii_kinds
    assert "Alice" not in result.sanitized_text
    assert "vegan recipes" in result.sanitized_text


def test_role_description_is_not_a_name(sanitizer):
    result = sanitizer.sanitize("I am a teacher looking for lesson plans")
    assert not result.contained_pii
    assert result.sanitized_text == "I am a teacher looking for lesson plans"


@pytest.mark.parametrize(
    "text",
    [
        "what is my password for gmail",
        "search treatments for my diagnosis",
        "is my salary above average",
        "I live at the corner of 5th and Main",
    ],
)
def test_sensitive_topic_short_circuits(sanitizer, text):
    result = sanitizer.sanitize(text)
    assert result.sanitized_text == ""
    assert result.pii_kinds == ["sensitive_topic"]
    assert not result.should_proceed


def test_too_short_after_redaction_does_not_proceed(sanitizer):
    result = sanitizer.sanitize("call me Bob")
    assert result.sanitized_text == ""
    assert not result.should_proceed


def test_clean_query_passes_through(sanitizer):
    result = sanitizer.sanitize("  latest   Python   release ")
    assert not result.contained_pii
    assert result.pii_kinds == []
    assert result.sanitized_text == "latest Python release"
    assert result.should_proceed


@pytest.mark.parametrize("text", SAMPLES)
def test_sanitize_is_idempotent(sanitizer, text):
    once = sanitizer.sanitize(text).sanitized_text
    twice = sanitizer.sanitize(once).sanitized_text
    assert twice == once


@pytest.mark.parametrize("text", SAMPLES + ["ab", "a@b.co x", "12345"])
def test_never_proceeds_when_short(sanitizer, text):
    result = sanitizer.sanitize(text)
    if result.should_proceed:
        assert len(result.sanitized_text) >= 3


def test_might_contain_pii(sanitizer):
    assert sanitizer.might_contain_pii("ping me at a@b.com")
    assert sanitizer.might_contain_pii("my password is hunter2")
    assert sanitizer.might_contain_pii("555-123-4567")
    assert not sanitizer.might_contain_pii("weather in Boston")
