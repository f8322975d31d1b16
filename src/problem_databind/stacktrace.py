"""Stack capture for raised problems.

Python exceptions only carry a traceback once raised. A :class:`ProblemError`
is often built, serialised and shipped without ever being raised, so it
records the stack at construction time instead. Frames are copied into plain
:class:`StackFrame` values right away; no frame object outlives the capture.
"""

from __future__ import annotations

import os
import sys
import traceback
from collections.abc import Iterable
from dataclasses import dataclass
from types import CodeType

# Frames from these packages are hidden so that an error created through
# ``Problem.to_exception`` reports its caller first.
INTERNAL_PACKAGES: tuple[str, ...] = ("problem_databind", "pydantic")


@dataclass(frozen=True, slots=True)
class StackFrame:
    """A single captured frame, most recent first within a stack trace."""

    module: str
    function: str
    filename: str
    lineno: int

    def __str__(self) -> str:
        return f"{self.module}.{self.function}({os.path.basename(self.filename)}:{self.lineno})"


def _is_internal(module: str, packages: Iterable[str]) -> bool:
    return any(module == package or module.startswith(f"{package}.") for package in packages)


def _constructor_codes(owner: type) -> frozenset[CodeType]:
    codes: set[CodeType] = set()
    for klass in owner.__mro__:
        code = getattr(vars(klass).get("__init__"), "__code__", None)
        if code is not None:
            codes.add(code)
    return frozenset(codes)


def capture_stack(
    owner: type,
    *,
    packages: Iterable[str] = INTERNAL_PACKAGES,
) -> tuple[StackFrame, ...]:
    """Capture the current stack, most recent frame first.

    Frames running an ``__init__`` defined along ``owner``'s MRO and frames
    belonging to ``packages`` are dropped.
    """
    hidden = tuple(packages)
    constructors = _constructor_codes(owner)
    frames: list[StackFrame] = []
    for frame, lineno in traceback.walk_stack(sys._getframe(1)):
        code = frame.f_code
        if code in constructors:
            continue
        module = frame.f_globals.get("__name__", "?")
        if _is_internal(module, hidden):
            continue
        frames.append(
            StackFrame(
                module=module,
                function=code.co_qualname,
                filename=code.co_filename,
                lineno=lineno,
            )
        )
    return tuple(frames)


def format_stack(frames: Iterable[StackFrame]) -> list[str]:
    """Render frames the way the ``stacktrace`` member carries them."""
    return [f"\tat {frame}" for frame in frames]


__all__ = ["INTERNAL_PACKAGES", "StackFrame", "capture_stack", "format_stack"]
