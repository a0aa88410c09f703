from __future__ import annotations

import logging

_MAX_DETAIL_CHARS = 200


def sanitize_detail(detail: str) -> str:
    # Remote bodies and handler errors can be large; keep log lines short and single-line.
    detail = (detail or "").replace("\r", " ").replace("\n", " ").strip()
    if len(detail) > _MAX_DETAIL_CHARS:
        detail = detail[:_MAX_DETAIL_CHARS] + "..."
    return detail


def describe_error(error: BaseException) -> str:
    text = str(error)
    name = type(error).__name__
    return sanitize_detail(f"{name}: {text}" if text else name)


def log_event(
    logger: logging.Logger,
    name: str,
    event: str,
    detail: str = "",
    *,
    level: int = logging.INFO,
    error: BaseException | None = None,
) -> None:
    """Write one `[<name>] <event>: <detail>` line to the given logger."""
    if error is not None and not detail:
        detail = describe_error(error)
    logger.log(
        level,
        "[%s] %s: %s",
        name,
        event,
        sanitize_detail(detail),
        exc_info=error,
    )
