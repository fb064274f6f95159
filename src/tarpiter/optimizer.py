from __future__ import annotations

from typing import List, Sequence

from .tokens import COUNTED_OPS, Token


def pack(tokens: Sequence[Token]) -> List[Token]:
    """Merge each run of identical + - < > tokens into one counted token.

    Jumps and I/O pass through untouched. Must run before jump
    resolution, since addresses point into the packed stream.
    """
    out: List[Token] = []
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if tok.op in COUNTED_OPS:
            n = 0
            while i < len(tokens) and tokens[i].op == tok.op:
                n += tokens[i].arg
                i += 1
            out.append(Token(tok.op, n))
            continue
        out.append(tok)
        i += 1
    return out
