"""Diagnostics: chained error objects and a per-thread diagnostics area.

Errors form a chain through ``cause`` and ``effect`` links: the cause
creates the effect. A :class:`Diag` keeps the most recent error, whose
causes are reached by following ``cause``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import NoReturn, TextIO

from routemin.say import say

DIAG_ERRMSG_MAX = 512
DIAG_FILENAME_MAX = 256


class DiagError(Exception):
    """An error with a source location, an error code and a chain of causes."""

    def __init__(
        self,
        message: str = "",
        file: str | None = "",
        line: int = 0,
        code: int = 0,
        saved_errno: int = 0,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.saved_errno = saved_errno
        self.file = ""
        self.line = 0
        self.set_location(file, line)
        self.cause: DiagError | None = None
        self.effect: DiagError | None = None

    def __str__(self) -> str:
        return self.message

    def set_location(self, file: str | None, line: int) -> None:
        """Record where the error was raised; long file names are truncated."""
        self.file = (file or "")[: DIAG_FILENAME_MAX - 1]
        self.line = line

    def format_msg(self, fmt: str, *args: object) -> str:
        """Replace the message with ``fmt % args``."""
        self.message = fmt % args if args else fmt
        self.args = (self.message,)
        return self.message

    def append_msg(self, fmt: str, *args: object) -> str:
        """Append ``fmt % args`` to the message."""
        self.message += fmt % args if args else fmt
        self.args = (self.message,)
        return self.message

    def set_prev(self, prev: DiagError | None) -> None:
        """Make ``prev`` the cause of this error.

        ``prev`` is cut from the chain it was the cause in, bringing its own
        causes along. The previous cause of this error is dropped.
        Raises ValueError if the link would create a cycle.
        """
        if prev is not None:
            if prev is self:
                raise ValueError("an error cannot be its own cause")
            if prev.effect is not None or self.effect is not None:
                tmp = prev.cause
                while tmp is not None:
                    if tmp is self:
                        raise ValueError("linking these errors would create a cycle")
                    tmp = tmp.cause
                prev.unlink_effect()
            prev.effect = self
        if self.cause is not None:
            self.cause.effect = None
        self.cause = prev
        self.__cause__ = prev

    def unlink_effect(self) -> None:
        """Detach this error from the error it caused."""
        if self.effect is not None:
            self.effect.cause = None
            self.effect.__cause__ = None
        self.effect = None

    def log(self, stream: TextIO | None = None) -> str:
        """Write the error as a log line and return the line."""
        return say(self.message, type(self).__name__, self.file, self.line, stream)

    def chain(self) -> Iterator[DiagError]:
        """This error followed by its causes, nearest first."""
        current: DiagError | None = self
        while current is not None:
            yield current
            current = current.cause


class Diag:
    """A diagnostics area holding the last error and, through it, its causes."""

    def __init__(self) -> None:
        self.last: DiagError | None = None

    def is_empty(self) -> bool:
        """True if no error is stored."""
        return self.last is None

    def clear(self) -> None:
        """Remove all errors."""
        self.last = None

    def set_error(self, error: DiagError) -> None:
        """Replace the stored errors with ``error``."""
        if error is None:
            raise ValueError("error must not be None")
        self.clear()
        error.unlink_effect()
        self.last = error

    def add_error(self, error: DiagError) -> None:
        """Push ``error`` on top; the current last error becomes its cause."""
        if error is None:
            raise ValueError("error must not be None")
        if self.last is None:
            raise ValueError("diagnostics area is empty; set an error first")
        if error.effect is not None:
            raise ValueError("error must not already cause another error")
        if self.last.effect is not None:
            raise ValueError("last error already causes another error")
        if error.cause is not None:
            error.cause.effect = None
        error.cause = self.last
        error.__cause__ = self.last
        self.last.effect = error
        self.last = error

    def move_to(self, other: Diag) -> None:
        """Move all errors into ``other``, leaving this area empty."""
        other.clear()
        if self.last is None:
            return
        other.last = self.last
        self.last = None

    def last_error(self) -> DiagError | None:
        """The most recent error, or None."""
        return self.last

    def raise_last(self) -> NoReturn:
        """Raise the most recent error."""
        if self.last is None:
            raise LookupError("diagnostics area is empty")
        raise self.last


_local = threading.local()


def diag_get() -> Diag:
    """The diagnostics area of the current thread."""
    diag = getattr(_local, "diag", None)
    if diag is None:
        diag = Diag()
        _local.diag = diag
    return diag