from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, Optional

from .api import Program
from .debugger import CommandKind, Debugger
from .jit import STOP_END, run_until_io
from .state import N_CELLS, OUTPUT_BUFFER_SIZE, ExecutionState
from .tokens import Op


class Outcome(Enum):
    COMPLETED = 'completed'
    RESTARTED = 'restarted'
    QUIT = 'quit'


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = N_CELLS
    output_buffer_size: int = OUTPUT_BUFFER_SIZE
    screen_width: Optional[int] = None
    jit: bool = True


class Engine:
    """Tick-based runner over a resolved program.

    Owns one ExecutionState for its whole life and re-initializes it at
    the start of every run cycle. In debug mode the debugger is consulted
    before each tick at or past ``state.skip``.
    """

    def __init__(
        self,
        program: Program,
        *,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        debugger: Optional[Debugger] = None,
        options: Optional[RunOptions] = None,
    ):
        self.program = program
        self.options = options or RunOptions()
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.debug = program.debug
        self.state = ExecutionState(
            tape_size=self.options.tape_size,
            output_size=self.options.output_buffer_size,
        )
        if self.debug and debugger is None:
            debugger = Debugger(stdin=self.stdin, stdout=self.stdout, width=self.options.screen_width)
        self.debugger = debugger if self.debug else None

    def flush(self) -> None:
        st = self.state
        if st.output:
            self.stdout.write(bytes(st.output))
            st.output.clear()
        self.stdout.flush()

    def step(self) -> None:
        """Execute the token at ``state.ip`` and advance one tick."""
        st = self.state
        tok = self.program.tokens[st.ip]
        op = tok.op

        if op == Op.LEFT:
            st.cursor = (st.cursor - tok.arg) % st.tape_size
        elif op == Op.RIGHT:
            st.cursor = (st.cursor + tok.arg) % st.tape_size
        elif op == Op.DECR:
            st.cell = st.cell - tok.arg
        elif op == Op.INCR:
            st.cell = st.cell + tok.arg
        elif op == Op.JMP_F:
            if st.cell == 0:
                st.ip = tok.arg
        elif op == Op.JMP_B:
            if st.cell != 0:
                st.ip = tok.arg
        elif op == Op.PRINT:
            value = st.cell
            if st.output_full:
                self.flush()
            st.output.append(10 if value == 10 else value)
        elif op == Op.INPUT:
            # Only non-debug runs show pending output before blocking
            if not self.debug:
                self.flush()
            data = self.stdin.read(1)
            if data:
                st.cell = 10 if data[0] == 10 else data[0]

        st.ip += 1
        st.ticks += 1

    def _run_ticks(self) -> Outcome:
        st = self.state
        n = len(self.program)
        while st.ip < n:
            if self.debugger is not None and st.skip <= st.ticks:
                command = self.debugger.pause(st, self.program)
                if command.kind is CommandKind.QUIT:
                    return Outcome.QUIT
                if st.restart:
                    return Outcome.RESTARTED
            self.step()
        return Outcome.COMPLETED

    def _run_accelerated(self) -> Outcome:
        st = self.state
        prog = self.program
        n = len(prog)
        while st.ip < n:
            ip, cursor, reason, steps = run_until_io(prog.ops, prog.args, st.tape, st.ip, st.cursor)
            st.ip = int(ip)
            st.cursor = int(cursor)
            st.ticks += int(steps)
            if reason == STOP_END:
                break
            self.step()
        return Outcome.COMPLETED

    def run_cycle(self) -> Outcome:
        self.state.reset()
        if self.debug or not self.options.jit:
            outcome = self._run_ticks()
        else:
            outcome = self._run_accelerated()
        if outcome is Outcome.COMPLETED and not self.debug:
            self.flush()
        return outcome

    def run(self) -> Outcome:
        """Run cycles until one completes or the debugger quits."""
        while True:
            outcome = self.run_cycle()
            if outcome is not Outcome.RESTARTED:
                return outcome


def run_program(
    program: Program,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> Outcome:
    return Engine(program, stdin=stdin, stdout=stdout, options=options).run()
