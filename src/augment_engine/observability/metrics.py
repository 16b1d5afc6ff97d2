"""Metric recording helpers for turns and provider fetches."""

from __future__ import annotations

from augment_engine.observability.logger import get_logger

logger = get_logger("metrics")


def log_classification_metrics(
    turn_id: str,
    domain: str,
    needs_confirmation: bool,
    detail_level: str | None = None,
) -> None:
    logger.info(
        "classification_metrics",
        turn_id=turn_id,
        domain=domain,
        needs_confirmation=needs_confirmation,
        detail_level=detail_level,
    )


def log_fetch_metrics(
    turn_id: str,
    domain: str,
    succeeded: bool,
    item_count: int,
    error_kind: str | None = None,
) -> None:
    logger.info(
        "fetch_metrics",
        turn_id=turn_id,
        domain=domain,
        succeeded=succeeded,
        item_count=item_count,
        error_kind=error_kind,
    )


def log_latency(turn_id: str, stage: str, duration_ms: float) -> None:
    logger.info(
        "latency",
        turn_id=turn_id,
        stage=stage,
        duration_ms=round(duration_ms, 2),
    )
