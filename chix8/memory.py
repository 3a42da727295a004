"""Bounds-checked access to CHIP-8 memory and registers."""

from typing import Sequence, Union

import jax.numpy as jnp

from chix8.constants import BYTE_MASK, MAX_ROM_SIZE, MEMORY_SIZE, NUM_REGISTERS, PROGRAM_START
from chix8.errors import OutOfBoundsAccess, RomTooLarge
from chix8.state import EmulatorState


def check_address(address: int, length: int = 1) -> None:
    """Raise OutOfBoundsAccess unless address..address+length-1 is in memory."""
    if length <= 0:
        return
    if address < 0 or address >= MEMORY_SIZE:
        raise OutOfBoundsAccess(address)
    if address + length > MEMORY_SIZE:
        raise OutOfBoundsAccess(MEMORY_SIZE)


def read_byte(state: EmulatorState, address: int) -> int:
    """Read one byte of memory."""
    check_address(address)
    return int(state.memory[address])


def write_byte(state: EmulatorState, address: int, value: int) -> EmulatorState:
    """Write one byte of memory (value taken modulo 256)."""
    check_address(address)
    return state.replace(memory=state.memory.at[address].set(value & BYTE_MASK))


def read_block(state: EmulatorState, address: int, length: int) -> jnp.ndarray:
    """Read `length` consecutive bytes starting at `address`."""
    check_address(address, length)
    return state.memory[address:address + length]


def write_block(state: EmulatorState, address: int, data: Union[bytes, Sequence[int], jnp.ndarray]) -> EmulatorState:
    """Write consecutive bytes starting at `address`."""
    values = jnp.asarray(list(data) if isinstance(data, (bytes, bytearray)) else data, dtype=jnp.uint8)
    if values.size == 0:
        return state
    check_address(address, values.size)
    return state.replace(memory=state.memory.at[address:address + values.size].set(values))


def _check_register(x: int) -> None:
    if not 0 <= x < NUM_REGISTERS:
        raise ValueError(f"Register index must be in [0, {NUM_REGISTERS}), got {x}")


def read_register(state: EmulatorState, x: int) -> int:
    """Read general register Vx."""
    _check_register(x)
    return int(state.V[x])


def write_register(state: EmulatorState, x: int, value: int) -> EmulatorState:
    """Write general register Vx, wrapping the value to 8 bits."""
    _check_register(x)
    return state.replace(V=state.V.at[x].set(value & BYTE_MASK))


def load_rom(state: EmulatorState, rom: Union[bytes, bytearray, Sequence[int]]) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    rom_data = bytes(rom)
    if len(rom_data) > MAX_ROM_SIZE:
        raise RomTooLarge(len(rom_data), MAX_ROM_SIZE)
    return write_block(state, PROGRAM_START, rom_data)


def load_rom_file(state: EmulatorState, filename: str) -> EmulatorState:
    """Load a ROM image from disk."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_rom(state, rom_data)
