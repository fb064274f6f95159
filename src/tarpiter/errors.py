from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


def _hint_for(kind: str, detail: str = '') -> Optional[str]:
    if kind == 'bracket':
        if detail == '[':
            return "Every ']' needs an earlier matching '['. Check for a stray ']' or a deleted '['."
        if detail == ']':
            return "Every '[' needs a later matching ']'. Check for a missing ']' at the end of a loop."
        return None
    if kind == 'file':
        return 'Check that the path exists and is readable.'
    if kind == 'allocation':
        return 'Token storage must hold at least one token per source byte.'
    return None


def _with_hint(message: str, hint: Optional[str]) -> str:
    return f"{message}\nHint: {hint}" if hint else message


@dataclass
class TarpitError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class TarpitFileError(TarpitError):
    path: str
    reason: str


@dataclass
class TarpitAllocationError(TarpitError):
    needed: int
    capacity: int


@dataclass
class UnbalancedBracketError(TarpitError):
    missing: str
    position: int


def make_file_error(*, path: str, reason: str) -> TarpitFileError:
    return TarpitFileError(
        message=_with_hint(f"ERROR: Could not open file: {path}: {reason}", _hint_for('file')),
        path=path,
        reason=reason,
    )


def make_allocation_error(*, needed: int, capacity: int) -> TarpitAllocationError:
    return TarpitAllocationError(
        message=_with_hint(
            f"ERROR: Memory allocation failed ({needed} bytes of source, room for {capacity} tokens).",
            _hint_for('allocation'),
        ),
        needed=needed,
        capacity=capacity,
    )


def make_bracket_error(*, missing: str, position: int) -> UnbalancedBracketError:
    return UnbalancedBracketError(
        message=_with_hint(
            f"ERROR: Unbalanced '[]' pair. A '{missing}' is missing. (token {position})",
            _hint_for('bracket', missing),
        ),
        missing=missing,
        position=position,
    )
