from __future__ import annotations

import re
import shutil
import sys
from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO, List, Optional

from .api import Program
from .state import ExecutionState

CLEAR_SCREEN = "\x1b[1;1H\x1b[2J"
SHOWN_CELL_WIDTH = 5
MIN_ROW_SIZE = 40

LEGEND = (
    "[Enter]     - Evaluate single instruction.\n"
    "<N> [Enter] - Evaluate <N> instructions.\n"
    "[R]eset     - Reset the debugger.\n"
    "[Q]uit      - Exit the debugger.\n"
)

# Leading count like sscanf("%zu"): optional blanks and '+', trailing text ignored
_COUNT_RE = re.compile(r'\s*\+?(\d+)')


class CommandKind(Enum):
    STEP = 'step'
    SKIP = 'skip'
    RESET = 'reset'
    QUIT = 'quit'


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    count: int = 0


def parse_command(line: str) -> Command:
    text = line.rstrip('\r\n')
    if text.upper() == 'Q':
        return Command(CommandKind.QUIT)
    m = _COUNT_RE.match(text)
    if m:
        return Command(CommandKind.SKIP, int(m.group(1)))
    if text.upper() == 'R':
        return Command(CommandKind.RESET)
    return Command(CommandKind.STEP)


def terminal_width() -> int:
    cols = shutil.get_terminal_size(fallback=(MIN_ROW_SIZE, 24)).columns
    return max(cols, MIN_ROW_SIZE)


def _pointer_line(steps: int, step_size: int) -> str:
    return ' ' * (step_size * steps + step_size // 2) + '^'


def _printable(value: int) -> str:
    return chr(value) if 0x20 <= value <= 0x7E else ' '


def _program_window(program: Program, ip: int, width: int) -> List[str]:
    half = width // 2
    first = ip - half if ip > half else 0
    window = ''.join(t.op.glyph for t in program.tokens[first:first + width])
    return [window, _pointer_line(ip - first, 1)]


def _cell_window(state: ExecutionState, width: int) -> List[str]:
    n_shown = width // SHOWN_CELL_WIDTH
    half_row = n_shown // 2
    first = state.cursor - half_row if state.cursor > half_row else 0
    indices = [(first + i) % state.tape_size for i in range(n_shown)]
    values = [int(state.tape[i]) for i in indices]
    return [
        'Cells:',
        ''.join('%3d  ' % (i % 1000) for i in indices),
        ''.join('[ %s ]' % _printable(v) for v in values),
        ''.join('[%3d]' % v for v in values),
        _pointer_line(state.cursor - first, SHOWN_CELL_WIDTH),
        '',
    ]


def render_state(state: ExecutionState, program: Program, width: int) -> bytes:
    """Build one debugger frame (without the clear-screen prefix)."""
    lines = [f"Evaluated instructions: {state.ticks}", '']
    lines += _program_window(program, state.ip, width)
    lines += _cell_window(state, width)
    text = '\n'.join(lines) + '\n' + LEGEND + '\nProgram output:\n'
    return text.encode('ascii') + bytes(state.output) + b'\n'


class Debugger:
    """Renders the state before a tick and applies the command typed in reply."""

    def __init__(
        self,
        *,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        width: Optional[int] = None,
    ):
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.width = width

    def screen_width(self) -> int:
        if self.width is None:
            return terminal_width()
        return max(self.width, MIN_ROW_SIZE)

    def render(self, state: ExecutionState, program: Program) -> None:
        self.stdout.write(CLEAR_SCREEN.encode('ascii'))
        self.stdout.write(render_state(state, program, self.screen_width()))
        self.stdout.flush()

    def read_command(self) -> Command:
        # EOF reads as an empty line, i.e. a single step
        line = self.stdin.readline()
        return parse_command(line.decode('latin-1'))

    @staticmethod
    def apply(command: Command, state: ExecutionState) -> None:
        if command.kind is CommandKind.SKIP:
            state.skip = state.ticks + command.count
        elif command.kind is CommandKind.RESET:
            state.restart = True

    def pause(self, state: ExecutionState, program: Program) -> Command:
        self.render(state, program)
        command = self.read_command()
        self.apply(command, state)
        return command
