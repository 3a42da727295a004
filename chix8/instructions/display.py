"""CHIP-8 display operations."""

import jax.numpy as jnp
from chix8.state import EmulatorState
from chix8.decode import DecodedInstruction
from chix8.constants import FLAG_REGISTER, SCREEN_WIDTH, SCREEN_HEIGHT, SPRITE_WIDTH
from chix8.memory import read_block

# Shift per sprite column, most significant bit leftmost
_column_shifts = jnp.arange(SPRITE_WIDTH - 1, -1, -1)


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Rows come from memory[I..I+N-1]. Pixels are XORed onto the display and
    wrap around both edges. VF is 1 when any lit pixel gets switched off.
    """
    height = instruction.n
    sprite_x = int(state.V[instruction.x]) % SCREEN_WIDTH
    sprite_y = int(state.V[instruction.y]) % SCREEN_HEIGHT

    sprite_rows = read_block(state, int(state.I), height).astype(jnp.int32)
    bits = ((sprite_rows[:, None] >> _column_shifts[None, :]) & 1).astype(jnp.bool_)

    xs = (sprite_x + jnp.arange(SPRITE_WIDTH)) % SCREEN_WIDTH
    ys = (sprite_y + jnp.arange(height)) % SCREEN_HEIGHT
    sprite = jnp.zeros_like(state.display).at[xs[None, :], ys[:, None]].set(bits)

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8))
    )
