from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence, Tuple

from .errors import make_bracket_error
from .tokens import Op, Token


def resolve_jumps(tokens: Sequence[Token]) -> Tuple[Token, ...]:
    """Give every '[' the index of its ']' and vice versa.

    Raises UnbalancedBracketError on a ']' with no open '[' or on '['
    left open at the end of the stream.
    """
    out: List[Token] = list(tokens)
    stack: List[int] = []

    for i, tok in enumerate(out):
        if tok.op == Op.JMP_F:
            stack.append(i)
        elif tok.op == Op.JMP_B:
            if not stack:
                raise make_bracket_error(missing='[', position=i)
            start = stack.pop()
            out[start] = replace(out[start], arg=i)
            out[i] = replace(tok, arg=start)

    if stack:
        raise make_bracket_error(missing=']', position=stack[-1])
    return tuple(out)
