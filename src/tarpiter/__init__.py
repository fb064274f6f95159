from .api import CompileOptions, Program, compile_bytes, compile_file
from .debugger import Command, CommandKind, Debugger, parse_command, render_state
from .engine import Engine, Outcome, RunOptions, run_program
from .errors import TarpitAllocationError, TarpitError, TarpitFileError, UnbalancedBracketError
from .jumps import resolve_jumps
from .lexer import tokenize
from .optimizer import pack
from .state import ExecutionState
from .tokens import Op, Token

__all__ = [
    'CompileOptions',
    'Program',
    'compile_bytes',
    'compile_file',
    'Command',
    'CommandKind',
    'Debugger',
    'parse_command',
    'render_state',
    'Engine',
    'Outcome',
    'RunOptions',
    'run_program',
    'TarpitError',
    'TarpitAllocationError',
    'TarpitFileError',
    'UnbalancedBracketError',
    'resolve_jumps',
    'tokenize',
    'pack',
    'ExecutionState',
    'Op',
    'Token',
]
