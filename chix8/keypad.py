"""CHIP-8 input latch and the FX0A wait-for-key state machine.

The machine is either running (``awaiting_input is None``) or blocked on a
register index set by FX0A. Only a key going from released to pressed
unblocks it: the key index is stored in that register, pc moves past the
FX0A instruction and the cycle counter advances by one. Releases and keys
that are already held do nothing.
"""

from typing import Sequence

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.constants import NUM_KEYS


def _check_key(key: int) -> None:
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key index must be in [0, {NUM_KEYS}), got {key}")


def is_waiting(state: EmulatorState) -> bool:
    """Whether execution is blocked on FX0A."""
    return state.awaiting_input is not None


def resolve_wait(state: EmulatorState, key: int) -> EmulatorState:
    """Complete a pending FX0A with `key`."""
    register = state.awaiting_input
    return state.replace(
        V=state.V.at[register].set(key),
        pc=state.pc + 2,
        cycles_emulated=state.cycles_emulated + 1,
        awaiting_input=None,
    )


def set_key(state: EmulatorState, key: int, pressed: bool) -> EmulatorState:
    """Deliver a single key press or release event."""
    _check_key(key)
    was_pressed = bool(state.keypad[key])
    if is_waiting(state) and pressed and not was_pressed:
        state = resolve_wait(state, key)
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def update_input(state: EmulatorState, keys: Sequence[bool]) -> EmulatorState:
    """Replace the whole key state with a 16-element level array.

    If several keys go down at once while waiting, the lowest index wins.
    """
    new_keypad = jnp.asarray(keys, dtype=jnp.bool_)
    if new_keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got shape {new_keypad.shape}")

    if is_waiting(state):
        rising = new_keypad & ~state.keypad
        if bool(jnp.any(rising)):
            state = resolve_wait(state, int(jnp.argmax(rising)))
    return state.replace(keypad=new_keypad)


def pressed_keys(state: EmulatorState) -> list[int]:
    """Indices of all keys currently held."""
    return [int(k) for k in jnp.flatnonzero(state.keypad)]
