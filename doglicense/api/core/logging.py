"""Logging helpers for the dog license service."""
from __future__ import annotations

import logging
import re
import time
from typing import Callable

from fastapi import FastAPI, Request

_RE_PHONE = re.compile(r"(?:\+?1[\s.-]?)?\(?\b\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b")


class PIIRedactor(logging.Filter):
    """Filter that masks US phone numbers in log records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if isinstance(record.msg, str):
            record.msg = _RE_PHONE.sub("[REDACTED]", record.msg)
        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: _redact(v) for k, v in record.args.items()}
            else:
                record.args = tuple(_redact(arg) for arg in record.args)
        return True


def _redact(value):
    if isinstance(value, str):
        return _RE_PHONE.sub("[REDACTED]", value)
    return value


def setup_logging(level: int | str = logging.INFO) -> None:
    """Configure global logging handlers."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for handler in logging.getLogger().handlers:
        _add_redactor(handler)
    _add_redactor(logging.getLogger("uvicorn.access"))


def _add_redactor(target: logging.Filterer) -> None:
    if not any(isinstance(f, PIIRedactor) for f in target.filters):
        target.addFilter(PIIRedactor())


async def timing_middleware(request: Request, call_next: Callable):
    """Log HTTP request duration."""

    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logging.getLogger("doglicense.request").info(
        "%s %s -> %s in %.2f ms", request.method, request.url.path, response.status_code, duration_ms
    )
    return response


def register_middleware(app: FastAPI) -> None:
    app.middleware("http")(timing_middleware)
