"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Optional

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction, decode
from chix8.constants import LAST_FETCH_ADDRESS
from chix8.errors import OutOfBoundsAccess, UnknownOpcode
from chix8.instructions.system import execute_system_instruction
from chix8.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset, execute_skip_if_key
)
from chix8.instructions.alu import execute_alu_operation
from chix8.instructions.registers import execute_set, execute_add, execute_set_index, execute_random
from chix8.instructions.display import execute_display
from chix8.instructions.misc import execute_misc_instruction

# Called with (address, decoded instruction) before the instruction runs
InstructionObserver = Callable[[int, DecodedInstruction], None]

INSTRUCTION_TABLE = (
    execute_system_instruction,
    execute_jump,
    execute_call,
    execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate,
    execute_skip_if_equal_register,
    execute_set,
    execute_add,
    execute_alu_operation,
    execute_skip_if_not_equal_register,
    execute_set_index,
    execute_jump_with_offset,
    execute_random,
    execute_display,
    execute_skip_if_key,
    execute_misc_instruction,
)


def execute(state: EmulatorState, instruction: int) -> EmulatorState:
    """Execute single CHIP-8 instruction.

    Expects pc to already point past the instruction, as left by `fetch`.
    """
    decoded_instruction = decode(instruction)
    return INSTRUCTION_TABLE[decoded_instruction.opcode](state, decoded_instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into a big-endian 16-bit word."""
    return (int(high) << 8) | int(low)


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    pc = int(state.pc)
    if pc > LAST_FETCH_ADDRESS:
        raise OutOfBoundsAccess(pc, f"instruction fetch out of bounds at 0x{pc:04X}")
    instruction = _pack_u16(state.memory[pc], state.memory[pc + 1])
    return state.replace(pc=state.pc + 2), instruction


def step(state: EmulatorState, observer: Optional[InstructionObserver] = None) -> EmulatorState:
    """Run one fetch-decode-execute cycle.

    A machine blocked on FX0A is returned unchanged. Timers are not
    touched; they run on their own clock (see `chix8.timers`).
    """
    if state.awaiting_input is not None:
        return state

    address = int(state.pc)
    state, instruction = fetch(state)
    if observer is not None:
        observer(address, decode(instruction))

    try:
        state = execute(state, instruction)
    except UnknownOpcode as e:
        raise UnknownOpcode(e.opcode, address) from None

    if state.awaiting_input is None:
        state = state.replace(cycles_emulated=state.cycles_emulated + 1)
    return state


def run_instructions(state: EmulatorState, n: int, observer: Optional[InstructionObserver] = None) -> EmulatorState:
    """Run up to `n` cycles; cycles while blocked on input do nothing."""
    for _ in range(n):
        state = step(state, observer)
    return state
