"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FONT_GLYPH_SIZE, FONT_START, INDEX_MASK
from chix8.errors import UnknownOpcode
from chix8.memory import check_address


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press (blocking).

    The instruction does not complete here: pc is moved back onto it and
    the machine stays blocked until a key press is delivered through
    `chix8.keypad`, which stores the key and moves pc forward again.
    """
    return state.replace(awaiting_input=instruction.x, pc=state.pc - 2)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register, wrapping at 16 bits. VF is not touched."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & INDEX_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + int(state.V[instruction.x]) * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    address = int(state.I)
    check_address(address, 3)

    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    return state.replace(memory=state.memory.at[address:address + 3].set(digits))


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I. I is unchanged."""
    count = instruction.x + 1
    address = int(state.I)
    check_address(address, count)
    return state.replace(memory=state.memory.at[address:address + count].set(state.V[:count]))


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I. I is unchanged."""
    count = instruction.x + 1
    address = int(state.I)
    check_address(address, count)
    return state.replace(V=state.V.at[:count].set(state.memory[address:address + count]))


MISC_INSTRUCTIONS = {
    0x07: execute_get_delay_timer,
    0x0A: execute_wait_for_key,
    0x15: execute_set_delay_timer,
    0x18: execute_set_sound_timer,
    0x1E: execute_add_to_index,
    0x29: execute_font_character,
    0x33: execute_bcd_conversion,
    0x55: execute_store_registers,
    0x65: execute_load_registers,
}


def execute_misc_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """Dispatch misc instructions on the low byte."""
    handler = MISC_INSTRUCTIONS.get(instruction.nn)
    if handler is None:
        raise UnknownOpcode(instruction.raw)
    return handler(state, instruction)
