"""CHIP-8 machine: the cycle driver that owns an emulator state.

`Chip8` serializes everything that touches the state (instruction cycles,
timer ticks, key delivery, snapshots) behind one lock, so a host may run
the interpreter on one thread while input and rendering happen on others.
Each operation swaps in a new immutable `EmulatorState`, so a snapshot is
always a complete frame.
"""

import threading
from typing import Iterable, Optional, Sequence, Union

import jax
import numpy as np

from chix8.config import MachineConfig, validate_config
from chix8.constants import PROGRAM_START
from chix8.decode import DecodedInstruction
from chix8.emulator import InstructionObserver, step as emulate_step
from chix8.errors import Chip8Error, MachineHalted
from chix8.history import InstructionHistory
from chix8.keypad import set_key, update_input
from chix8.logging import ConsoleLogger, progress_bar
from chix8.memory import load_rom
from chix8.state import EmulatorState, create_state
from chix8.sync import SyncFlag
from chix8.timers import CycleClock, sound_active, tick_timers

# Number of history lines dumped when the machine halts
_HALT_TRACE_LINES = 8


class Chip8:
    """A single CHIP-8 interpreter session.

    Args:
        rom: Program bytes to load at 0x200 (may be loaded later)
        config: Machine settings, defaults to `MachineConfig()`
        observers: Extra instruction observers, called with (address, instruction)
        logger: Console logger, built from the config when omitted
    """

    def __init__(
        self,
        rom: Optional[Union[bytes, bytearray, Sequence[int]]] = None,
        config: Optional[MachineConfig] = None,
        observers: Iterable[InstructionObserver] = (),
        logger: Optional[ConsoleLogger] = None,
    ):
        self.config = validate_config(config or MachineConfig())
        self.logger = logger or ConsoleLogger(
            log_level=self.config.log_level,
            use_colors=self.config.use_colors,
            show_timestamps=self.config.show_timestamps,
        )
        self.history = (
            InstructionHistory(self.config.history_size) if self.config.history_size > 0 else None
        )
        self.observers = list(observers)

        self.draw_flag = SyncFlag()
        self.beep_flag = SyncFlag()

        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._error: Optional[Chip8Error] = None
        self._rom = b""
        self._state = self._fresh_state()

        if rom is not None:
            self.load_rom(rom)

    @classmethod
    def from_file(cls, filename: str, **kwargs) -> "Chip8":
        """Create a machine from a ROM image on disk."""
        with open(filename, 'rb') as f:
            rom_data = f.read()
        return cls(rom_data, **kwargs)

    def _fresh_state(self) -> EmulatorState:
        return create_state(jax.random.PRNGKey(self.config.seed))

    # Lifecycle

    def load_rom(self, rom: Union[bytes, bytearray, Sequence[int]]):
        """Start a fresh session running `rom`."""
        rom_data = bytes(rom)
        state = load_rom(self._fresh_state(), rom_data)
        with self._lock:
            self._rom = rom_data
            self._state = state
            self._error = None
            if self.history is not None:
                self.history.clear()
            self.draw_flag.set()
            self.beep_flag.unset()
        self.logger.info(f"Loaded {len(rom_data)} bytes into memory at 0x{PROGRAM_START:03X}")

    def reset(self):
        """Restart the current ROM from a clean state."""
        self.logger.debug("Resetting machine")
        self.load_rom(self._rom)

    def _halt(self, error: Chip8Error):
        self._error = error
        self._stop_event.set()
        self.logger.critical(f"Fatal error: {error}")
        if self.history is not None and len(self.history):
            self.logger.error("Last executed instructions:")
            for line in self.history.lines()[-_HALT_TRACE_LINES:]:
                self.logger.error(f"  {line}")

    def _check_running(self):
        if self._error is not None:
            raise MachineHalted(self._error)

    # Execution

    def _observe(self, address: int, instruction: DecodedInstruction):
        if self.history is not None:
            self.history(address, instruction)
        for observer in self.observers:
            observer(address, instruction)

    def _sync_beep(self):
        active = sound_active(self._state)
        if active != self.beep_flag.check():
            if active:
                self.beep_flag.set()
            else:
                self.beep_flag.unset()

    def step(self) -> bool:
        """Execute one instruction. Returns False if blocked waiting for a key."""
        with self._lock:
            self._check_running()
            if self._state.awaiting_input is not None:
                return False

            previous = self._state
            try:
                self._state = emulate_step(previous, self._observe)
            except Chip8Error as e:
                self._halt(e)
                raise

            if self._state.display is not previous.display:
                self.draw_flag.set()
            if self._state.sound_timer is not previous.sound_timer:
                self._sync_beep()
            if self._state.awaiting_input is not None:
                self.logger.debug(f"Waiting for key into V{self._state.awaiting_input:X}")
            return True

    def tick_timers(self):
        """Advance the delay and sound timers by one 60 Hz tick."""
        with self._lock:
            self._state = tick_timers(self._state)
            self._sync_beep()

    def run_frame(self):
        """Run one timer period: a batch of instructions, then a timer tick.

        The batch stops early when the program blocks on FX0A; the timers
        still tick.
        """
        self._check_running()
        for _ in range(self.config.instructions_per_frame):
            if not self.step():
                break
        self.tick_timers()

    def run(self, frames: Optional[int] = None, realtime: bool = True, show_progress: bool = False) -> int:
        """Run frames until `frames` is reached or `stop()` is called.

        Args:
            frames: Number of frames to run, or None to run until stopped
            realtime: Pace frames at the timer frequency against wall-clock time
            show_progress: Show a tqdm progress bar (needs `frames`)

        Returns:
            Number of frames completed
        """
        self._stop_event.clear()
        clock = CycleClock(self.config.timer_frequency)
        bar = progress_bar(frames) if show_progress and frames is not None else None
        completed = 0
        try:
            while not self._stop_event.is_set() and (frames is None or completed < frames):
                self.run_frame()
                completed += 1
                if bar is not None:
                    bar.update(1)
                if realtime:
                    clock.wait_until_ready()
        finally:
            if bar is not None:
                bar.close()
        return completed

    def stop(self):
        """Ask a running `run()` loop to return after the current frame."""
        self._stop_event.set()

    # Input collaborator

    def press_key(self, key: int):
        self._deliver(lambda state: set_key(state, key, True))

    def release_key(self, key: int):
        self._deliver(lambda state: set_key(state, key, False))

    def update_input(self, keys: Sequence[bool]):
        """Replace all 16 key levels at once."""
        self._deliver(lambda state: update_input(state, keys))

    def _deliver(self, update):
        with self._lock:
            waiting = self._state.awaiting_input
            self._state = update(self._state)
            if waiting is not None and self._state.awaiting_input is None:
                self.logger.debug(f"Key V{waiting:X} = {int(self._state.V[waiting])}, resuming")

    # Render / audio collaborators and inspection

    @property
    def state(self) -> EmulatorState:
        """Current (immutable) emulator state."""
        with self._lock:
            return self._state

    def display_snapshot(self) -> np.ndarray:
        """Copy of the display as a (64, 32) boolean numpy array."""
        return np.array(self.state.display, dtype=np.bool_)

    @property
    def sound_active(self) -> bool:
        return sound_active(self.state)

    @property
    def awaiting_input(self) -> Optional[int]:
        return self.state.awaiting_input

    @property
    def cycles_emulated(self) -> int:
        return self.state.cycles_emulated

    @property
    def halted(self) -> bool:
        return self._error is not None

    @property
    def error(self) -> Optional[Chip8Error]:
        return self._error
