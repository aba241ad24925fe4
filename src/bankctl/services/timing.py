"""Per-operation timing for BankService calls.

Off unless ``--verbose`` switches it on. While on, every ``@timed`` method
records its elapsed time plus the named ``step()`` blocks inside it, logs
one ``operation.timed`` debug event, and copies the figures into
``ServiceResult.meta["timing"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from bankctl.services.result import ServiceResult

_enabled: ContextVar[bool] = ContextVar("bank_timing_enabled", default=False)
_active: ContextVar[OperationTiming | None] = ContextVar("bank_timing_active", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


@dataclass
class OperationTiming:
    """Elapsed time of one service operation and its steps, in milliseconds."""

    op: str
    elapsed_ms: float = 0.0
    steps: dict[str, float] = field(default_factory=dict)

    def to_meta(self) -> dict[str, Any]:
        meta: dict[str, Any] = {"op": self.op, "elapsed_ms": self.elapsed_ms}
        if self.steps:
            meta["steps"] = dict(self.steps)
        return meta


@contextmanager
def step(name: str) -> Iterator[None]:
    """Time a block under the operation currently being timed, if any."""
    timing = _active.get()
    if timing is None:
        yield
        return
    started = time.perf_counter()
    try:
        yield
    finally:
        timing.steps[name] = _elapsed_ms(started)


def timed(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Decorator: time a service method when timing is enabled."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        timing = OperationTiming(op=func.__name__)
        token = _active.set(timing)
        started = time.perf_counter()
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = result.ok if isinstance(result, ServiceResult) else True
        finally:
            timing.elapsed_ms = _elapsed_ms(started)
            _active.reset(token)
            structlog.get_logger("bankctl.timing").debug(
                "operation.timed",
                op=timing.op,
                elapsed_ms=timing.elapsed_ms,
                steps=timing.steps,
                ok=ok,
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "timing": timing.to_meta()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper


def enable_timing() -> None:
    _enabled.set(True)


def disable_timing() -> None:
    _enabled.set(False)
