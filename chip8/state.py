"""CHIP-8 machine state structures."""

from typing import Optional

import jax.numpy as jnp
from flax.struct import PyTreeNode, field

from chip8.constants import (
    DISPLAY_SIZE, DISPLAY_START, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, PROGRAM_START, STACK_DEPTH,
)
from chip8.errors import WrongKey
from chip8.rng import JaxRandomSource, RandomSource


class StackState(PyTreeNode):
    """Return addresses of pending subroutine calls, innermost last."""
    frames: tuple = ()
    depth: int = field(pytree_node=False, default=STACK_DEPTH)

    @property
    def pointer(self) -> int:
        return len(self.frames)


class MachineState(PyTreeNode):
    """Main CHIP-8 machine state.

    The packed framebuffer is part of ``memory``, see ``framebuffer``.

    ``random_source`` is a static field holding a stateful callable. States
    derived with ``replace`` share it, so replaying from an earlier state does
    not repeat the same CXNN bytes. Build a fresh source to replay.
    """
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    random_source: RandomSource = field(pytree_node=False, default_factory=JaxRandomSource)


def create_state(
    random_source: Optional[RandomSource] = None,
    seed: int = 0,
    stack_depth: int = STACK_DEPTH,
) -> MachineState:
    """Create a blank machine: zeroed registers, empty stack, PC at the entry point."""
    if random_source is None:
        random_source = JaxRandomSource(seed)
    return MachineState(stack=StackState(depth=stack_depth), random_source=random_source)


def framebuffer(state: MachineState) -> jnp.ndarray:
    """Packed monochrome display, one bit per pixel, row-major."""
    return state.memory[DISPLAY_START:DISPLAY_START + DISPLAY_SIZE]


def set_key(state: MachineState, key: int, pressed: bool) -> MachineState:
    if not 0 <= key < NUM_KEYS:
        raise WrongKey(key)
    return state.replace(keypad=state.keypad.at[key].set(bool(pressed)))


def reset_keyboard(state: MachineState) -> MachineState:
    return state.replace(keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
