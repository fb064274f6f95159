from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np

from .errors import make_file_error
from .jumps import resolve_jumps
from .lexer import Source, tokenize
from .optimizer import pack
from .tokens import Token


@dataclass(frozen=True)
class CompileOptions:
    debug: bool = False
    optimize: Optional[bool] = None

    @property
    def packs(self) -> bool:
        if self.debug:
            return False
        return True if self.optimize is None else self.optimize


@dataclass(frozen=True)
class Program:
    tokens: Tuple[Token, ...]
    debug: bool = False
    ops: np.ndarray = field(init=False, repr=False, compare=False)
    args: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Flat arrays for the numba runner
        object.__setattr__(self, 'ops', np.array([int(t.op) for t in self.tokens], dtype=np.int64))
        object.__setattr__(self, 'args', np.array([t.arg for t in self.tokens], dtype=np.int64))

    def __len__(self) -> int:
        return len(self.tokens)

    def glyphs(self) -> str:
        return ''.join(t.op.glyph for t in self.tokens)


def compile_bytes(
    source: Source,
    *,
    options: Optional[CompileOptions] = None,
    capacity: Optional[int] = None,
) -> Program:
    opts = options or CompileOptions()
    tokens = tokenize(source, capacity=capacity)
    if opts.packs:
        tokens = pack(tokens)
    return Program(tokens=resolve_jumps(tokens), debug=opts.debug)


def compile_file(path: Union[str, Path], *, options: Optional[CompileOptions] = None) -> Program:
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise make_file_error(path=str(p), reason=e.strerror or str(e)) from e
    # One token slot per byte, like sizing the buffer from the file size
    return compile_bytes(data, options=options, capacity=len(data) + 1)
