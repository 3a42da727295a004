"""Ring buffer of recently executed instructions.

`InstructionHistory` is an instruction observer: pass it to
`chix8.emulator.step` or to a `Chip8` machine. It only stores
(address, word) pairs; text is produced when the history is read.
"""

from collections import deque
from typing import Iterator

from chix8.decode import DecodedInstruction
from chix8.disassembler import disassemble


class InstructionHistory:
    """Keep the last `maxlen` executed instructions."""

    def __init__(self, maxlen: int = 2048):
        if maxlen <= 0:
            raise ValueError(f"maxlen must be positive, got {maxlen}")
        self._entries = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._entries.maxlen

    def __call__(self, address: int, instruction: DecodedInstruction):
        self._entries.append((address, instruction.raw))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        return iter(list(self._entries))

    def clear(self):
        self._entries.clear()

    def lines(self) -> list[str]:
        """Formatted history, oldest first."""
        return [
            f"0x{address:04X}  {raw:04X}  {disassemble(raw)}"
            for address, raw in list(self._entries)
        ]
