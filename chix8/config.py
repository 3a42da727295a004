"""Machine configuration.

Defaults live in the `MachineConfig` dataclass; `load_config` layers an
optional YAML file and keyword overrides on top with OmegaConf, e.g.::

    config = load_config("chix8.yaml", instruction_frequency=1000)
"""

import dataclasses
from typing import Optional

from omegaconf import OmegaConf

from chix8.constants import INSTRUCTION_FREQUENCY, TIMER_FREQUENCY


@dataclasses.dataclass
class MachineConfig:
    """Settings for a `Chip8` machine.

    Attributes:
        instruction_frequency: Instructions executed per second (typically 700)
        timer_frequency: Timer ticks per second (60 on real hardware)
        seed: Seed for the PRNG key behind CXNN
        history_size: Instructions kept by the history observer (0 disables it)
        log_level: Console log level
        use_colors: Colorize console output when attached to a TTY
        show_timestamps: Prefix log lines with elapsed time
    """
    instruction_frequency: int = INSTRUCTION_FREQUENCY
    timer_frequency: int = TIMER_FREQUENCY
    seed: int = 0
    history_size: int = 2048
    log_level: str = "INFO"
    use_colors: bool = True
    show_timestamps: bool = True

    @property
    def instructions_per_frame(self) -> int:
        """Instructions executed between two timer ticks."""
        return self.instruction_frequency // self.timer_frequency


def validate_config(config: MachineConfig) -> MachineConfig:
    """Raise ValueError on inconsistent settings."""
    if config.timer_frequency <= 0:
        raise ValueError(f"timer_frequency must be positive, got {config.timer_frequency}")
    if config.instruction_frequency < config.timer_frequency:
        raise ValueError(
            f"instruction_frequency ({config.instruction_frequency}) must be at least "
            f"timer_frequency ({config.timer_frequency})"
        )
    if config.history_size < 0:
        raise ValueError(f"history_size must be non-negative, got {config.history_size}")
    return config


def load_config(path: Optional[str] = None, **overrides) -> MachineConfig:
    """Build a validated `MachineConfig` from defaults, a YAML file and overrides."""
    cfg = OmegaConf.structured(MachineConfig)
    if path is not None:
        cfg = OmegaConf.merge(cfg, OmegaConf.load(path))
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.create(overrides))
    return validate_config(OmegaConf.to_object(cfg))
