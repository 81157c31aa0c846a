# shutility/utils/errors.py
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    PREDICATE_FALSE = "predicate_false"
    EXTERNAL_OPERATION_FAILED = "external_operation_failed"
    CALLBACK_FAILED = "callback_failed"

    @property
    def exit_code(self) -> int:
        # 2 = 用法错误，其余均为操作失败
        return 2 if self is ErrorKind.INVALID_ARGUMENT else 1


class ShellUtilityError(RuntimeError):
    """
    Base class for every error raised by shutility.
    Carries an ErrorKind so the CLI can turn it into an exit code.
    """

    kind: ErrorKind = ErrorKind.CALLBACK_FAILED

    def __init__(self, message: str = "", exit_code: Optional[int] = None):
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> int:
        if self._exit_code is not None:
            return self._exit_code
        return self.kind.exit_code


class InvalidArgument(ShellUtilityError, ValueError):
    """Missing argument, wrong type, or empty input where an element is required."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(ShellUtilityError, LookupError):
    kind = ErrorKind.NOT_FOUND


class PredicateFalse(ShellUtilityError):
    kind = ErrorKind.PREDICATE_FALSE


class ExternalOperationFailed(ShellUtilityError):
    """Calendar parse / compute failure (bad datetime string, overflow)."""

    kind = ErrorKind.EXTERNAL_OPERATION_FAILED


class CallbackFailed(ShellUtilityError):
    """
    A caller-supplied predicate / transform raised.
    `item` is the element being processed, `cause` the original exception.
    """

    kind = ErrorKind.CALLBACK_FAILED

    def __init__(
        self,
        message: str,
        item: Any = None,
        cause: Optional[BaseException] = None,
        exit_code: Optional[int] = None,
    ):
        super().__init__(message, exit_code=exit_code)
        self.item = item
        self.cause = cause


class CommandFailed(ShellUtilityError):
    """External command callback exited non-zero."""

    kind = ErrorKind.CALLBACK_FAILED
