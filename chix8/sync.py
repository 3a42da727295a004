"""Thread-safe flag shared between the emulator and its collaborators."""

import threading
from typing import Optional


class SyncFlag:
    """Boolean flag for one producer and one consumer thread.

    The emulator sets it (e.g. "display changed", "tone on") and a render
    or audio thread checks, waits on and clears it.
    """

    def __init__(self, value: bool = False):
        self._condition = threading.Condition()
        self._flag = value

    def check(self) -> bool:
        with self._condition:
            return self._flag

    def set(self):
        self._assign(True)

    def unset(self):
        self._assign(False)

    def _assign(self, value: bool):
        with self._condition:
            self._flag = value
            self._condition.notify_all()

    def wait(self, state: bool = True, timeout: Optional[float] = None) -> bool:
        """Block until the flag equals `state`; False if `timeout` expired first."""
        with self._condition:
            return self._condition.wait_for(lambda: self._flag == state, timeout=timeout)

    def __bool__(self) -> bool:
        return self.check()
