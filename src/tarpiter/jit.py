from __future__ import annotations

from numba import njit

STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_END = 3


@njit(cache=True)
def run_until_io(ops, args, memory, pc, pointer):
    """
    Execute tape and jump tokens until the next '.' or ',' or the end.

    Returns (pc, pointer, stop_reason, steps). On an I/O stop, pc is the
    index of the I/O token, which has not been executed or counted.
    """
    stop_reason = STOP_END
    mem_len = len(memory)
    prog_len = len(ops)
    steps = 0

    while pc < prog_len:
        command = ops[pc]
        n = args[pc]

        if command == 62:  # '>'
            pointer = (pointer + n % mem_len) % mem_len
        elif command == 60:  # '<'
            pointer = (pointer + mem_len - n % mem_len) % mem_len
        elif command == 43:  # '+'
            memory[pointer] = (memory[pointer] + n) & 255
        elif command == 45:  # '-'
            memory[pointer] = (memory[pointer] - n) & 255
        elif command == 46:  # '.'
            stop_reason = STOP_OUTPUT
            break
        elif command == 44:  # ','
            stop_reason = STOP_INPUT
            break
        elif command == 91:  # '['
            if memory[pointer] == 0:
                pc = n
        elif command == 93:  # ']'
            if memory[pointer] != 0:
                pc = n

        pc += 1
        steps += 1

    return pc, pointer, stop_reason, steps
