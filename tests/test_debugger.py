#!/usr/bin/env python3
"""
Debugger tests: command parsing, skip/reset/quit control and the frame layout.
"""

import io
import os
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from tarpiter import (
    CommandKind, CompileOptions, Debugger, Engine, ExecutionState, Outcome,
    compile_bytes, parse_command, render_state,
)
from tarpiter.debugger import CLEAR_SCREEN, LEGEND


class RecordingDebugger(Debugger):
    def __init__(self, commands, width=40):
        super().__init__(stdin=io.BytesIO(commands), stdout=io.BytesIO(), width=width)
        self.rendered_at = []

    def render(self, state, program):
        self.rendered_at.append(state.ticks)
        super().render(state, program)


def debug_engine(source, commands, stdin=b""):
    program = compile_bytes(source, options=CompileOptions(debug=True))
    debugger = RecordingDebugger(commands)
    engine = Engine(program, stdin=io.BytesIO(stdin), stdout=io.BytesIO(), debugger=debugger)
    return engine, debugger


def test_parse_quit():
    assert parse_command("q\n").kind is CommandKind.QUIT
    assert parse_command("Q").kind is CommandKind.QUIT


def test_parse_count():
    cmd = parse_command("12\n")
    assert cmd.kind is CommandKind.SKIP and cmd.count == 12
    assert parse_command("  +3 more").count == 3
    assert parse_command("0").kind is CommandKind.SKIP


def test_parse_reset():
    assert parse_command("r\n").kind is CommandKind.RESET
    assert parse_command("R").kind is CommandKind.RESET


def test_parse_anything_else_steps():
    for line in ["", "\n", "x\n", "-3\n", "quit\n", "reset\n"]:
        assert parse_command(line).kind is CommandKind.STEP


def test_skip_suppresses_renders():
    """After '3' at tick 0, the next pause is before tick 3."""
    engine, debugger = debug_engine("++++++", b"3\n")
    assert engine.run() is Outcome.COMPLETED
    assert debugger.rendered_at[:2] == [0, 3]
    assert 1 not in debugger.rendered_at
    assert 2 not in debugger.rendered_at
    # command input is exhausted, so every later tick is a single step
    assert debugger.rendered_at == [0, 3, 4, 5]
    assert engine.state.tape[0] == 6


def test_enter_steps_one_tick():
    engine, debugger = debug_engine("+++", b"\n\n\n")
    engine.run()
    assert debugger.rendered_at == [0, 1, 2]


def test_skip_zero_renders_next_tick():
    engine, debugger = debug_engine("+++", b"0\n0\n0\n")
    engine.run()
    assert debugger.rendered_at == [0, 1, 2]


def test_quit_stops_run():
    engine, debugger = debug_engine("+++++", b"2\nq\n")
    assert engine.run() is Outcome.QUIT
    assert debugger.rendered_at == [0, 2]
    assert engine.state.ticks == 2
    assert engine.state.tape[0] == 2


def test_reset_starts_fresh_cycle():
    engine, debugger = debug_engine("+++++.", b"2\nr\n100\n")
    assert engine.run() is Outcome.COMPLETED
    assert debugger.rendered_at == [0, 2, 0]
    assert engine.state.ticks == 6
    assert engine.state.tape[0] == 5
    assert bytes(engine.state.output) == b"\x05"


def test_reset_clears_output_and_input_position():
    engine, debugger = debug_engine(",.,.", b"3\nr\n100\n", stdin=b"abcd")
    engine.run()
    # second cycle keeps reading where the first stopped
    assert bytes(engine.state.output) == b"cd"


def test_debugger_writes_clear_screen():
    engine, debugger = debug_engine("+", b"\n")
    engine.run()
    frame = debugger.stdout.getvalue()
    assert frame.startswith(CLEAR_SCREEN.encode('ascii'))
    assert b"Evaluated instructions: 0" in frame


def frame_lines(state, program, width=40):
    return render_state(state, program, width).decode('latin-1').split('\n')


def test_frame_layout():
    program = compile_bytes("+[>+<-]", options=CompileOptions(debug=True))
    state = ExecutionState()
    lines = frame_lines(state, program)
    assert lines[0] == "Evaluated instructions: 0"
    assert lines[1] == ""
    assert lines[2] == "+[>+<-]"
    assert lines[3] == "^"
    assert lines[4] == "Cells:"
    assert lines[5] == "  0    1    2    3    4    5    6    7  "
    assert lines[6] == "[   ]" * 8
    assert lines[7] == "[  0]" * 8
    assert lines[8] == "  ^"
    assert lines[9] == ""
    assert '\n'.join(lines[10:14]) + '\n' == LEGEND
    assert lines[14] == ""
    assert lines[15] == "Program output:"
    assert lines[16] == ""


def test_frame_shows_output():
    program = compile_bytes("+", options=CompileOptions(debug=True))
    state = ExecutionState()
    state.output.extend(b"hi")
    assert render_state(state, program, 40).endswith(b"Program output:\nhi\n")


def test_program_window_follows_ip():
    program = compile_bytes("+" * 50 + "-" * 50, options=CompileOptions(debug=True))
    state = ExecutionState()
    state.ip = 30
    lines = frame_lines(state, program)
    # 20 tokens either side of the caret
    assert lines[2] == "+" * 40
    assert lines[3] == " " * 20 + "^"

    state.ip = 60
    lines = frame_lines(state, program)
    assert lines[2] == "+" * 10 + "-" * 30
    assert lines[3] == " " * 20 + "^"


def test_cell_window_follows_cursor():
    program = compile_bytes("+", options=CompileOptions(debug=True))
    state = ExecutionState()
    state.cursor = 1010
    state.tape[1010] = ord('A')
    state.tape[1011] = 7
    lines = frame_lines(state, program)
    # 8 cells shown, 4 to the left of the cursor
    assert lines[5] == "  6    7    8    9   10   11   12   13  "
    assert lines[6] == "[   ]" * 4 + "[ A ]" + "[   ]" * 3
    assert lines[7] == "[  0]" * 4 + "[ 65]" + "[  7]" + "[  0]" * 2
    assert lines[8] == " " * 22 + "^"


def test_cell_window_wraps_at_tape_end():
    program = compile_bytes("+", options=CompileOptions(debug=True))
    state = ExecutionState(tape_size=16)
    state.cursor = 15
    lines = frame_lines(state, program)
    assert lines[5] == " 11   12   13   14   15    0    1    2  "


def test_narrow_width_uses_minimum():
    debugger = Debugger(stdin=io.BytesIO(), stdout=io.BytesIO(), width=10)
    assert debugger.screen_width() == 40
