"""Confirmation-gated tool orchestration.

One ``ToolOrchestrator`` serves one conversation. A turn has two halves:
``check_if_search_needed`` classifies and gates without touching any
external service, and ``perform_confirmed_search`` (or ``decline_search``)
resolves the pending confirmation. Every state change is published to
subscribers so a UI can render progress.
"""

from __future__ import annotations

import asyncio
import dataclasses
from collections.abc import Callable
from datetime import datetime, timezone

from augment_engine.config.settings import Settings
from augment_engine.exceptions import (
    AugmentEngineError,
    PermissionDenied,
    ProviderError,
    QuotaExceeded,
    SensitiveContent,
)
from augment_engine.formatting.context_formatter import ContextFormatter
from augment_engine.formatting.renderers import (
    calendar_context,
    reminder_created_context,
    reminders_context,
)
from augment_engine.models.domain import (
    CalendarTimeRange,
    ConfirmationRequest,
    ConfirmationType,
    ExternalContext,
    Query,
    QueryDomain,
    SearchIntent,
)
from augment_engine.models.schemas import SearchAttemptResult
from augment_engine.models.state import (
    FETCHING_STATES,
    TERMINAL_STATES,
    AwaitingConfirmation,
    CalendarComplete,
    Complete,
    DetectingIntent,
    Failed,
    FetchingCalendar,
    FetchingReminders,
    FetchingSports,
    FetchingWeather,
    Idle,
    RemindersComplete,
    Sanitizing,
    Searching,
    SearchState,
    Skipped,
    SportsComplete,
    WeatherComplete,
)
from augment_engine.observability.logger import get_logger
from augment_engine.observability.metrics import (
    log_classification_metrics,
    log_fetch_metrics,
    log_latency,
)
from augment_engine.observability.tracing import TurnTrace
from augment_engine.protocols.calendar import CalendarStore
from augment_engine.protocols.llm import IntentLLM
from augment_engine.protocols.settings_store import SettingsStore
from augment_engine.providers.coordinator import ProviderFallbackCoordinator
from augment_engine.query.intent import IntentClassifier
from augment_engine.query.sanitizer import QuerySanitizer

logger = get_logger("orchestrator")

StateListener = Callable[[SearchState], None]

DECLINED_REASON = "User declined"
NO_PENDING_REASON = "No search is awaiting confirmation"
ABANDONED_REASON = "Search was cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ToolOrchestrator:
    def __init__(
        self,
        settings_store: SettingsStore,
        llm: IntentLLM,
        web_search: ProviderFallbackCoordinator,
        weather: ProviderFallbackCoordinator,
        sports: ProviderFallbackCoordinator,
        calendar: CalendarStore,
        settings: Settings | None = None,
        intent_classifier: IntentClassifier | None = None,
        sanitizer: QuerySanitizer | None = None,
        formatter: ContextFormatter | None = None,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._settings = settings or Settings()
        self._store = settings_store
        self._llm = llm
        self._web_search = web_search
        self._weather = weather
        self._sports = sports
        self._calendar = calendar
        self._intent = intent_classifier or IntentClassifier()
        self._sanitizer = sanitizer or QuerySanitizer()
        self._formatter = formatter or ContextFormatter(self._settings)
        self._now = now

        self._state: SearchState = Idle()
        self._pending: ConfirmationRequest | None = None
        self._listeners: list[StateListener] = []
        self._lock = asyncio.Lock()
        # Bumped whenever a turn is abandoned; in-flight work from an older
        # turn must not publish state or record usage.
        self._turn = 0
        self._trace: TurnTrace | None = None

    # Observable state

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def pending_request(self) -> ConfirmationRequest | None:
        return self._pending

    @property
    def is_fetching(self) -> bool:
        return isinstance(self._state, FETCHING_STATES)

    @property
    def is_finished(self) -> bool:
        """True once the last turn reached a completed, failed or skipped state."""
        return isinstance(self._state, TERMINAL_STATES)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for every state change; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SearchState, turn: int | None = None) -> None:
        if turn is not None and turn != self._turn:
            return
        self._state = state
        logger.debug("state_changed", state=type(state).__name__)
        for listener in list(self._listeners):
            listener(state)

    # Turn lifecycle

    async def check_if_search_needed(self, text: str) -> bool:
        """Classify ``text`` and, if external data would help, await confirmation.

        Performs no network, calendar or reminder access.
        """
        async with self._lock:
            self._turn += 1
            turn = self._turn
            self._pending = None
            self._trace = trace = TurnTrace()
            self._set_state(DetectingIntent(), turn)

            try:
                with trace.span("classify"):
                    request = await self._build_request(text, turn)
            except asyncio.CancelledError:
                self._set_state(Idle(), turn)
                raise

            if turn != self._turn:
                return False

            if request is None:
                self._set_state(Idle(), turn)
                log_classification_metrics(trace.turn_id, "none", needs_confirmation=False)
                return False

            self._pending = request
            self._set_state(
                AwaitingConfirmation(request.display_query, request.confirmation_type), turn
            )
            log_classification_metrics(
                trace.turn_id,
                request.domain.value,
                needs_confirmation=True,
                detail_level=request.detail_level.value,
            )
            return True

    async def perform_confirmed_search(self) -> SearchAttemptResult:
        """Fetch, format and return context for the pending confirmation."""
        async with self._lock:
            request = self._pending
            if request is None or not isinstance(self._state, AwaitingConfirmation):
                logger.warning("confirm_without_pending_request", state=type(self._state).__name__)
                return SearchAttemptResult.failure(NO_PENDING_REASON, error_kind="no_pending_request")

            self._pending = None
            turn = self._turn
            trace = self._trace or TurnTrace()

            try:
                with trace.span("fetch", domain=request.domain.value):
                    context, complete_state, charge = await self._fetch(request, turn)
            except asyncio.CancelledError:
                self._set_state(Idle(), turn)
                raise
            except AugmentEngineError as e:
                return self._fail(request, e.reason, e.kind, turn, trace)
            except Exception as e:
                logger.error("fetch_unexpected_error", domain=request.domain.value, error=str(e))
                return self._fail(request, "Something went wrong", "unexpected_error", turn, trace)

            if turn != self._turn:
                logger.info("stale_fetch_discarded", domain=request.domain.value)
                return SearchAttemptResult.failure(
                    ABANDONED_REASON, error_kind="cancelled", domain=request.domain
                )

            if charge:
                await self._store.record_search()

            with trace.span("format"):
                formatted = self._formatter.format(
                    context, self._prompt_query(request), request.detail_level
                )

            self._set_state(complete_state, turn)
            log_fetch_metrics(
                trace.turn_id, request.domain.value, True, context.result_count
            )
            log_latency(trace.turn_id, "turn", trace.elapsed_ms)
            logger.info("turn_complete", turn_id=trace.turn_id, spans=trace.summary())

            return SearchAttemptResult(
                succeeded=True,
                formatted_context=formatted,
                sources=context.source_labels,
                detail_level=request.detail_level,
                domain=request.domain,
            )

    def decline_search(self) -> SearchAttemptResult:
        """Resolve the pending confirmation offline. Never consumes quota.

        Without a pending confirmation this is a no-op that reports
        ``no_pending_request``; the state is left as it is.
        """
        request = self._pending
        if request is None or not isinstance(self._state, AwaitingConfirmation):
            logger.warning("decline_without_pending_request", state=type(self._state).__name__)
            return SearchAttemptResult.failure(NO_PENDING_REASON, error_kind="no_pending_request")

        self._pending = None
        self._turn += 1
        self._set_state(Skipped(DECLINED_REASON))
        logger.info("search_declined", domain=request.domain.value)
        return SearchAttemptResult.failure(
            DECLINED_REASON, error_kind="declined", domain=request.domain
        )

    def reset(self) -> None:
        """Discard any pending request and abandon in-flight work."""
        self._pending = None
        self._turn += 1
        self._trace = None
        self._set_state(Idle())

    # Settings accessors

    async def set_enabled(self, enabled: bool) -> None:
        await self._store.set_enabled(enabled)

    async def is_enabled(self) -> bool:
        return await self._store.is_enabled()

    async def set_api_key(self, key: str) -> None:
        await self._store.set_api_key(key)

    async def get_api_key(self) -> str | None:
        return await self._store.get_api_key()

    async def clear_api_key(self) -> None:
        await self._store.clear_api_key()

    async def remaining_searches(self) -> int:
        return await self._store.remaining_searches()

    async def searches_this_month(self) -> int:
        return await self._store.searches_this_month()

    # Classification

    async def _build_request(self, text: str, turn: int) -> ConfirmationRequest | None:
        try:
            query = self._intent.classify(text)

            if query.domain == QueryDomain.CALENDAR:
                return ConfirmationRequest(query, text, ConfirmationType.CALENDAR)

            if query.domain == QueryDomain.REMINDERS:
                display = query.reminder.title if query.reminder else text
                return ConfirmationRequest(query, display, ConfirmationType.REMINDERS)

            if query.domain == QueryDomain.WEATHER:
                location = query.location or self._settings.default_location.strip()
                if not location:
                    logger.info("weather_location_unresolved")
                    return None
                query = dataclasses.replace(query, location=location)
                return ConfirmationRequest(query, location, ConfirmationType.WEATHER)

            if query.domain == QueryDomain.SPORTS and query.league is not None:
                return ConfirmationRequest(
                    query, query.league.display_name, ConfirmationType.SPORTS
                )

            return await self._build_search_request(query, turn)
        except SensitiveContent:
            return None
        except AugmentEngineError as e:
            logger.warning("classification_failed", error_kind=e.kind, reason=e.reason)
            return None
        except Exception as e:
            logger.warning("classification_failed", error=str(e))
            return None

    async def _build_search_request(self, query: Query, turn: int) -> ConfirmationRequest | None:
        if not await self._store.is_enabled():
            logger.debug("web_search_disabled")
            return None
        if not await self._store.has_api_key():
            logger.debug("web_search_no_api_key")
            return None
        if not await self._store.has_quota_remaining():
            logger.info("web_search_quota_exhausted")
            return None

        intent = self._intent.detect_general_intent(query.text)
        if intent == SearchIntent.NO_SEARCH_NEEDED and self._intent.is_excluded(query.text):
            return None
        if intent != SearchIntent.DEFINITELY_NEEDS_SEARCH:
            if not await self._llm.needs_web_search(query.text):
                return None

        detail_level = await self._llm.classify_response_detail(query.text)

        self._set_state(Sanitizing(), turn)
        sanitized = self._sanitizer.sanitize(query.text)
        if not sanitized.should_proceed:
            logger.info("search_blocked_by_sanitizer", pii_kinds=sanitized.pii_kinds)
            raise SensitiveContent()

        search_query = self._intent.extract_search_query(sanitized.sanitized_text)
        if len(search_query) < 3:
            return None

        logger.info("search_requested", query=search_query, intent=intent.value)
        return ConfirmationRequest(
            query=dataclasses.replace(query, domain=QueryDomain.GENERAL),
            display_query=search_query,
            confirmation_type=ConfirmationType.WEB_SEARCH,
            detail_level=detail_level,
        )

    # Fetching

    async def _fetch(
        self, request: ConfirmationRequest, turn: int
    ) -> tuple[ExternalContext, SearchState, bool]:
        """Fetch context for ``request``.

        The flag is True only when the web backend was actually called, so a
        cached web result costs no quota.
        """
        query = request.query

        if request.confirmation_type == ConfirmationType.WEB_SEARCH:
            if not await self._store.has_quota_remaining():
                raise QuotaExceeded()
            self._set_state(Searching(request.display_query), turn)
            context, cached = await self._web_search.fetch_with_status(request.display_query)
            return context, Complete(context.result_count), not cached

        if request.confirmation_type == ConfirmationType.WEATHER:
            self._set_state(FetchingWeather(query.location), turn)
            context = await self._weather.fetch(query.location)
            return context, WeatherComplete(), False

        if request.confirmation_type == ConfirmationType.SPORTS:
            self._set_state(FetchingSports(query.league.display_name), turn)
            context = await self._sports.fetch(query.league)
            return context, SportsComplete(context.result_count), False

        if request.confirmation_type == ConfirmationType.CALENDAR:
            if not await self._calendar.request_calendar_access():
                raise PermissionDenied("Calendar access was not granted")
            self._set_state(FetchingCalendar(), turn)
            time_range = query.time_range or CalendarTimeRange.TODAY
            events = await self._calendar.fetch_events(time_range)
            context = calendar_context(events, time_range)
            return context, CalendarComplete(context.result_count), False

        if not await self._calendar.request_reminder_access():
            raise PermissionDenied("Reminders access was not granted")
        self._set_state(FetchingReminders(), turn)

        if query.is_reminder_creation and query.reminder is not None:
            created = await self._calendar.create_reminder(
                query.reminder.title, query.reminder.time_hint
            )
            if not created:
                raise ProviderError("Could not create reminder")
            context = reminder_created_context(query.reminder.title, query.reminder.time_hint)
        else:
            reminders = await self._calendar.fetch_reminders()
            context = reminders_context(reminders, self._now())
        return context, RemindersComplete(context.result_count), False

    def _fail(
        self,
        request: ConfirmationRequest,
        reason: str,
        error_kind: str,
        turn: int,
        trace: TurnTrace,
    ) -> SearchAttemptResult:
        logger.warning("fetch_failed", domain=request.domain.value, error_kind=error_kind)
        self._set_state(Failed(reason), turn)
        log_fetch_metrics(trace.turn_id, request.domain.value, False, 0, error_kind)
        return SearchAttemptResult.failure(reason, error_kind=error_kind, domain=request.domain)

    @staticmethod
    def _prompt_query(request: ConfirmationRequest) -> str:
        # General queries only ever leave classification in sanitized form.
        if request.domain == QueryDomain.GENERAL:
            return request.display_query
        return request.query.text
