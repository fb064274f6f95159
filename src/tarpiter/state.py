from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

N_CELLS = 65536
OUTPUT_BUFFER_SIZE = 4096


@dataclass
class ExecutionState:
    tape_size: int = N_CELLS
    output_size: int = OUTPUT_BUFFER_SIZE
    tape: np.ndarray = field(init=False, repr=False, compare=False)
    output: bytearray = field(default_factory=bytearray, repr=False)
    cursor: int = 0
    ip: int = 0
    ticks: int = 0
    skip: int = 0
    restart: bool = False

    def __post_init__(self) -> None:
        self.tape = np.zeros(self.tape_size, dtype=np.uint8)

    def reset(self) -> None:
        """Start a fresh run cycle; buffers are reused, not reallocated."""
        self.tape.fill(0)
        self.output.clear()
        self.cursor = 0
        self.ip = 0
        self.ticks = 0
        self.skip = 0
        self.restart = False

    @property
    def cell(self) -> int:
        return int(self.tape[self.cursor])

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape[self.cursor] = value & 0xFF

    @property
    def output_full(self) -> bool:
        return len(self.output) >= self.output_size
