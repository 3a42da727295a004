"""CHIP-8 delay/sound timers and fixed-rate pacing.

Timers tick at a fixed 60 Hz, independently of how fast instructions are
executed. `tick_timers` is the tick itself; `CycleClock` lets a host loop
pace ticks (or instruction batches) against wall-clock time.
"""

import time

import jax.numpy as jnp
from chix8.state import EmulatorState


def _decrement(timer: jnp.ndarray) -> jnp.ndarray:
    return jnp.where(timer > 0, timer - 1, timer).astype(jnp.uint8)


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Decrement both timers by one, stopping at zero."""
    return state.replace(
        delay_timer=_decrement(state.delay_timer),
        sound_timer=_decrement(state.sound_timer),
    )


def sound_active(state: EmulatorState) -> bool:
    """Whether the audio collaborator should be emitting a tone."""
    return int(state.sound_timer) > 0


class CycleClock:
    """Fixed-rate clock for pacing a host loop.

    Args:
        rate_hz: Number of cycles per second
    """

    def __init__(self, rate_hz: float):
        if rate_hz <= 0:
            raise ValueError(f"rate_hz must be positive, got {rate_hz}")
        self.cycle_duration = 1.0 / rate_hz
        self.last_cycle_start = time.perf_counter()

    def is_ready(self) -> bool:
        """Return True (and start a new cycle) once a full period has elapsed."""
        now = time.perf_counter()
        if now - self.last_cycle_start >= self.cycle_duration:
            self.last_cycle_start = now
            return True
        return False

    def wait_until_ready(self):
        """Sleep until the current period is over, then start the next one."""
        remaining = self.last_cycle_start + self.cycle_duration - time.perf_counter()
        if remaining > 0:
            time.sleep(remaining)
        self.last_cycle_start = time.perf_counter()

    def spin_until_ready(self):
        """Busy-wait variant of `wait_until_ready` for tighter timing."""
        while not self.is_ready():
            continue
