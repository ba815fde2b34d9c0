"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp

from chip8 import FixedRandomSource, Interpreter, create_state, load_rom


@pytest.fixture
def fresh_state():
    """Provide a blank machine state with a predictable random source."""
    return create_state(random_source=FixedRandomSource([0xAB, 0x5C, 0x00, 0xFF]))


@pytest.fixture
def loaded_state(fresh_state):
    """Fresh state after loading an empty ROM (fonts installed, display blank)."""
    return load_rom(fresh_state, b"")


@pytest.fixture
def interpreter():
    """Provide an interpreter with a predictable random source."""
    return Interpreter(random_source=FixedRandomSource([0xAB, 0x5C]))


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def with_registers(state, values):
    """Helper to set several V registers at once, e.g. ``{0x1: 0x42}``."""
    V = state.V
    for register, value in values.items():
        V = V.at[register].set(value)
    return state.replace(V=V)


def assemble(*words):
    """Helper to turn instruction words into ROM bytes."""
    return b"".join(word.to_bytes(2, "big") for word in words)
