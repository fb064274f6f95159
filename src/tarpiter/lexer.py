from __future__ import annotations

from typing import BinaryIO, List, Optional, Union

from .errors import make_allocation_error
from .tokens import CODE_BYTES, Op, Token

Source = Union[bytes, bytearray, memoryview, str, BinaryIO]


def is_code_byte(b: int) -> bool:
    return b in CODE_BYTES


def _read_source(source: Source) -> bytes:
    if isinstance(source, str):
        return source.encode('utf-8')
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    return source.read()


def tokenize(source: Source, *, capacity: Optional[int] = None) -> List[Token]:
    """Turn raw source into one token per instruction byte.

    Every byte outside ``+-<>[].,`` is a comment and is dropped. When
    ``capacity`` is given it is the number of tokens the caller has room
    for, and it must cover one token per source byte.
    """
    data = _read_source(source)
    if capacity is not None and capacity < len(data):
        raise make_allocation_error(needed=len(data), capacity=capacity)
    return [Token(Op(b)) for b in data if b in CODE_BYTES]
