"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with key=value structured format
_logger = logging.getLogger("carverse")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    request_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event.

    Args:
        request_id: Request identifier (UUID string, or a fixed tag for background work)
        component: Component name (e.g., 'http', 'catalog', 'seed')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "request_id": request_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_catalog_query(
    request_id: str,
    filters: dict[str, Any],
    results_count: int,
    total: int,
    **kwargs: Any,
) -> None:
    """
    Log catalog listing query.

    Args:
        request_id: Request identifier
        filters: Filters applied
        results_count: Number of cars on the returned page
        total: Number of matching cars
        **kwargs: Additional fields
    """
    log_event(
        request_id=request_id,
        component="catalog",
        catalog_filters=filters,
        catalog_results_count=results_count,
        catalog_total=total,
        **kwargs,
    )


def log_comparison(
    request_id: str,
    car_ids: list[str],
    missing: Optional[list[str]] = None,
    **kwargs: Any,
) -> None:
    """
    Log car comparison.

    Args:
        request_id: Request identifier
        car_ids: Requested car identifiers
        missing: Identifiers that were not found
        **kwargs: Additional fields
    """
    fields: dict[str, Any] = {"compare_ids": car_ids}
    if missing:
        fields["compare_missing"] = missing
    fields.update(kwargs)

    log_event(
        request_id=request_id,
        component="compare",
        **fields,
    )


def log_seed(
    status: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log seed progress.

    Args:
        status: Seed status (e.g., 'started', 'inserted', 'skipped', 'failed')
        level: Log level
        **kwargs: Additional fields
    """
    log_event(
        request_id="seed",
        component="seed",
        level=level,
        seed_status=status,
        **kwargs,
    )


# Export logger instance for direct use
logger = _logger
