"""CHIP-8 interpreter package."""

from chix8.state import EmulatorState, StackState, create_state
from chix8.emulator import execute, fetch, step, run_instructions
from chix8.memory import load_rom, load_rom_file, read_byte, write_byte, read_register, write_register
from chix8.decode import DecodedInstruction, decode
from chix8.keypad import set_key, update_input, is_waiting
from chix8.timers import tick_timers, sound_active, CycleClock
from chix8.errors import (
    Chip8Error, OutOfBoundsAccess, StackOverflow, StackUnderflow, UnknownOpcode, RomTooLarge, MachineHalted
)
from chix8.constants import *
from chix8.config import MachineConfig, load_config
from chix8.machine import Chip8
from chix8.disassembler import disassemble
from chix8.history import InstructionHistory
from chix8.rendering import chip8_display_to_rgb, create_color_scheme, display_to_text

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "step",
    "run_instructions",
    "load_rom",
    "load_rom_file",
    "read_byte",
    "write_byte",
    "read_register",
    "write_register",
    "DecodedInstruction",
    "decode",
    "set_key",
    "update_input",
    "is_waiting",
    "tick_timers",
    "sound_active",
    "CycleClock",
    "Chip8Error",
    "OutOfBoundsAccess",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "RomTooLarge",
    "MachineHalted",
    "MachineConfig",
    "load_config",
    "Chip8",
    "disassemble",
    "InstructionHistory",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "create_color_scheme",
    "display_to_text",
]
