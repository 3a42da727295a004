"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chix8 import Chip8, MachineConfig, create_state, load_rom


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def quiet_config():
    """Machine configuration that keeps test output short."""
    return MachineConfig(log_level="WARNING", use_colors=False, show_timestamps=False)


@pytest.fixture
def machine(quiet_config):
    """Provide a machine with no program loaded."""
    return Chip8(config=quiet_config)


def state_with_rom(rom):
    """Helper to build a fresh state running `rom`."""
    return load_rom(create_state(), bytes(rom))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )
