"""BaseService — foundation for ServiceResult-returning services.

Every service receives an :class:`AccountStore` at construction time.
:func:`guarded` turns the two failure families into failed results:

- :class:`~bankctl.domain.errors.LedgerError` → ``ServiceError(code=exc.code)``
- ``SQLAlchemyError`` → logged with traceback, ``STORAGE_ERROR``

so a failed request never takes down an interactive session.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Concatenate, ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from bankctl.domain.errors import LedgerError
from bankctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from bankctl.infrastructure.store import AccountStore

logger = logging.getLogger(__name__)

STORAGE_ERROR = "STORAGE_ERROR"

_P = ParamSpec("_P")
_S = TypeVar("_S", bound="BaseService")


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """Build a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )


def guarded(
    op: str,
) -> Callable[
    [Callable[Concatenate[_S, _P], ServiceResult]],
    Callable[Concatenate[_S, _P], ServiceResult],
]:
    """Decorator: convert ledger and storage exceptions into failed results."""

    def decorator(
        func: Callable[Concatenate[_S, _P], ServiceResult],
    ) -> Callable[Concatenate[_S, _P], ServiceResult]:
        @functools.wraps(func)
        def wrapper(self: _S, *args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
            try:
                return func(self, *args, **kwargs)
            except LedgerError as exc:
                return failure(op, exc.code, str(exc))
            except SQLAlchemyError as exc:
                logger.exception("Storage failure during %s", op)
                return failure(
                    op,
                    STORAGE_ERROR,
                    "The ledger database could not complete the request",
                    reason=type(exc).__name__,
                )

        return wrapper

    return decorator


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BankService(BaseService):
            @guarded("deposit")
            def deposit(self, number: str, amount: str) -> ServiceResult:
                ...
    """

    def __init__(self, store: AccountStore) -> None:
        self._store = store
