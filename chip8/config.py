"""Emulator configuration."""

import os

from flax import struct

from chip8.constants import STACK_DEPTH
from chip8.logging import DEFAULT_LEVEL

ENV_PREFIX = "CHIP8_"


@struct.dataclass
class EmulatorConfig:
    """Settings shared by the host loop and the interpreter.

    Attributes:
        instructions_per_frame: Instructions executed per displayed frame
        fps: Frame rate of the host loop; timers tick once per frame
        scale: Window pixels per CHIP-8 pixel
        color_scheme: Name passed to ``create_color_scheme``
        log_level: Level for every package logger
        seed: Seed for the default random source
        stack_depth: Maximum nesting of subroutine calls
    """
    instructions_per_frame: int = 10
    fps: int = 60
    scale: int = 10
    color_scheme: str = "classic"
    log_level: str = DEFAULT_LEVEL
    seed: int = 0
    stack_depth: int = STACK_DEPTH


_FIELD_TYPES = {
    "instructions_per_frame": int,
    "fps": int,
    "scale": int,
    "color_scheme": str,
    "log_level": str,
    "seed": int,
    "stack_depth": int,
}


def load_config(**overrides) -> EmulatorConfig:
    """Build a config from ``CHIP8_*`` environment variables, then ``overrides``.

    ``None`` overrides are ignored so argparse defaults can be passed through.
    """
    values = {}
    for name, cast in _FIELD_TYPES.items():
        raw = os.environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            try:
                values[name] = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {ENV_PREFIX + name.upper()}: {raw!r}") from e

    unknown = set(overrides) - set(_FIELD_TYPES)
    if unknown:
        raise TypeError(f"Unknown config fields: {sorted(unknown)}")
    values.update({k: v for k, v in overrides.items() if v is not None})

    config = EmulatorConfig(**values)
    if config.instructions_per_frame < 1 or config.fps < 1 or config.scale < 1:
        raise ValueError("instructions_per_frame, fps and scale must be positive")
    return config
