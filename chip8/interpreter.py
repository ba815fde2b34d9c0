"""Stateful CHIP-8 interpreter for hosts.

``Interpreter`` owns one ``MachineState`` and exposes the mutable API a host
loop needs. Hosts set the keypad between steps: set input state, then step.
"""

import os
from typing import Optional

import numpy as np

from chip8.constants import INSTRUCTION_SIZE, MEMORY_SIZE, NUM_REGISTERS, STACK_DEPTH
from chip8.decode import mnemonic
from chip8.emulator import load_rom, read_rom, step
from chip8.logging import get_logger, progress_bar
from chip8.rng import RandomSource
from chip8.state import MachineState, create_state, framebuffer, reset_keyboard, set_key

logger = get_logger("chip8.interpreter")


class Interpreter:
    """A single CHIP-8 machine driven one instruction at a time.

    Args:
        random_source: Zero-argument callable returning a byte for CXNN.
            Defaults to a ``JaxRandomSource`` seeded with ``seed``.
        seed: Seed for the default random source
        stack_depth: Maximum number of nested subroutine calls
    """

    def __init__(
        self,
        random_source: Optional[RandomSource] = None,
        seed: int = 0,
        stack_depth: int = STACK_DEPTH,
    ):
        self.state: MachineState = create_state(random_source, seed=seed, stack_depth=stack_depth)
        self.instruction_count = 0

    def load(self, rom: bytes):
        """Copy ``rom`` into the program area. Raises ``MemoryFull`` if it does not fit."""
        self.state = load_rom(self.state, rom)

    def load_file(self, path: str | os.PathLike):
        logger.info(f"Emulating {path}")
        self.load(read_rom(path))

    def step(self, tick_timers: bool = True):
        """Execute exactly one instruction.

        Args:
            tick_timers: Count the timers down as part of this step. Hosts
                running several instructions per 60 Hz frame tick only once.
        """
        self.state = step(self.state, tick=tick_timers)
        self.instruction_count += 1

    def run(self, steps: int, progress: bool = False) -> int:
        """Execute ``steps`` instructions, optionally with a progress bar."""
        if not progress:
            for _ in range(steps):
                self.step()
            return steps

        with progress_bar(steps) as bar:
            for _ in range(steps):
                self.step()
                bar.update(1)
        return steps

    def framebuffer(self) -> bytes:
        """Packed monochrome bitmap, ``width * height / 8`` bytes."""
        return bytes(np.asarray(framebuffer(self.state)))

    def set_key(self, index: int, pressed: bool):
        self.state = set_key(self.state, index, pressed)
        logger.info(f"{index:X} {'pressed' if pressed else 'released'}")

    def reset_keyboard(self):
        self.state = reset_keyboard(self.state)

    @property
    def pc(self) -> int:
        return int(self.state.pc)

    @property
    def index(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> list[int]:
        return [int(v) for v in self.state.V]

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is running; hosts beep during that time."""
        return self.sound_timer > 0

    @property
    def stack_depth(self) -> int:
        return self.state.stack.pointer

    def disassemble(self, address: Optional[int] = None, count: int = 1) -> list[str]:
        """Disassemble ``count`` instructions starting at ``address`` (default: PC)."""
        if address is None:
            address = self.pc
        memory = np.asarray(self.state.memory)
        lines = []
        for offset in range(0, count * INSTRUCTION_SIZE, INSTRUCTION_SIZE):
            at = address + offset
            if at + 1 >= MEMORY_SIZE:
                break
            word = (int(memory[at]) << 8) | int(memory[at + 1])
            lines.append(f"{at:#06x}: {word:04x}  {mnemonic(word)}")
        return lines

    def dump_memory(self) -> str:
        """Hex dump of the whole address space, 16 bytes per line."""
        memory = np.asarray(self.state.memory)
        lines = []
        for start in range(0, MEMORY_SIZE, 0x10):
            row = " ".join(f"{b:02x}" for b in memory[start:start + 0x10])
            lines.append(f"0x{start:04X}: {row}")
        return "\n".join(lines)

    def __repr__(self):
        registers = " ".join(f"V{i:X}={v:02x}" for i, v in zip(range(NUM_REGISTERS), self.registers))
        return f"Interpreter(pc={self.pc:#06x}, I={self.index:#05x}, {registers})"
