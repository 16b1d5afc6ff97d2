"""Pydantic models for caller-facing results and provider payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field

from augment_engine.models.domain import DetailLevel, QueryDomain


class SearchAttemptResult(BaseModel):
    """Outcome of a confirmed (or declined) augmentation attempt."""

    succeeded: bool
    formatted_context: str | None = None
    sources: list[str] = Field(default_factory=list)
    detail_level: DetailLevel = DetailLevel.DETAILED
    domain: QueryDomain | None = None
    error_kind: str | None = None
    reason: str | None = None

    @classmethod
    def failure(
        cls,
        reason: str,
        error_kind: str | None = None,
        domain: QueryDomain | None = None,
    ) -> SearchAttemptResult:
        return cls(succeeded=False, reason=reason, error_kind=error_kind, domain=domain)


# Brave Search API payload (only the fields we read)


class BraveWebResult(BaseModel):
    title: str
    url: str
    description: str = ""
    age: str | None = None


class BraveWebResults(BaseModel):
    results: list[BraveWebResult] = Field(default_factory=list)


class BraveFAQItem(BaseModel):
    question: str
    answer: str
    url: str = ""
    title: str = ""


class BraveFAQ(BaseModel):
    results: list[BraveFAQItem] = Field(default_factory=list)


class BraveNewsItem(BaseModel):
    title: str
    url: str
    description: str = ""
    age: str | None = None


class BraveNews(BaseModel):
    results: list[BraveNewsItem] = Field(default_factory=list)


class BraveLocationItem(BaseModel):
    title: str
    url: str = ""
    description: str = ""


class BraveLocations(BaseModel):
    results: list[BraveLocationItem] = Field(default_factory=list)


class BraveDiscussionItem(BaseModel):
    title: str
    url: str
    description: str = ""


class BraveDiscussions(BaseModel):
    results: list[BraveDiscussionItem] = Field(default_factory=list)


class BraveInfoboxItem(BaseModel):
    title: str = ""
    url: str = ""
    description: str = ""
    long_desc: str | None = None


class BraveInfobox(BaseModel):
    results: list[BraveInfoboxItem] = Field(default_factory=list)


class BraveResponse(BaseModel):
    web: BraveWebResults | None = None
    faq: BraveFAQ | None = None
    news: BraveNews | None = None
    locations: BraveLocations | None = None
    discussions: BraveDiscussions | None = None
    infobox: BraveInfobox | None = None
