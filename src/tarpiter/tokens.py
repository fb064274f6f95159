from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class Op(IntEnum):
    INCR = 43   # '+'
    DECR = 45   # '-'
    LEFT = 60   # '<'
    RIGHT = 62  # '>'
    JMP_F = 91  # '['
    JMP_B = 93  # ']'
    PRINT = 46  # '.'
    INPUT = 44  # ','

    @property
    def glyph(self) -> str:
        return chr(self.value)


# Ops whose argument is a repeat count and which may be packed together.
COUNTED_OPS = frozenset({Op.INCR, Op.DECR, Op.LEFT, Op.RIGHT})
JUMP_OPS = frozenset({Op.JMP_F, Op.JMP_B})
CODE_BYTES = frozenset(int(op) for op in Op)


@dataclass(frozen=True)
class Token:
    op: Op
    arg: int = 1  # repeat count, or jump address for '[' and ']'

    def __str__(self) -> str:
        return self.op.glyph
