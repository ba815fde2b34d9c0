"""Tests for fetch, timers, ROM loading and the step cycle."""

import jax.numpy as jnp
import pytest

from chip8 import (
    DISPLAY_START, FONT_START, MAX_ROM_SIZE, PROGRAM_START, InvalidAddress, MemoryFull, fetch,
    framebuffer, load_rom, read_rom, step, tick_timers,
)
from chip8.constants import FONT_DATA
from conftest import assemble


class TestLoadRom:
    """Test ROM loading."""

    def test_copies_rom_at_program_start(self, fresh_state):
        state = load_rom(fresh_state, b"\x12\x34\x56")

        assert [int(b) for b in state.memory[PROGRAM_START:PROGRAM_START + 4]] == [0x12, 0x34, 0x56, 0]
        assert state.pc == PROGRAM_START

    def test_installs_font(self, fresh_state):
        state = load_rom(fresh_state, b"")
        assert jnp.array_equal(state.memory[FONT_START:FONT_START + 80], FONT_DATA)

    def test_blanks_display(self, fresh_state):
        state = fresh_state.replace(memory=fresh_state.memory.at[DISPLAY_START].set(0xFF))
        state = load_rom(state, b"\x00\xe0")
        assert not jnp.any(framebuffer(state))

    def test_largest_rom_fits(self, fresh_state):
        state = load_rom(fresh_state, bytes([0xAA]) * MAX_ROM_SIZE)
        assert state.memory[PROGRAM_START + MAX_ROM_SIZE - 1] == 0xAA
        assert state.memory[PROGRAM_START + MAX_ROM_SIZE] == 0

    def test_rom_too_large(self, fresh_state):
        with pytest.raises(MemoryFull) as excinfo:
            load_rom(fresh_state, bytes(MAX_ROM_SIZE + 1))
        assert excinfo.value.size == MAX_ROM_SIZE + 1

    def test_read_rom(self, tmp_path):
        path = tmp_path / "test.ch8"
        path.write_bytes(b"\x00\xe0\x12\x00")
        assert read_rom(path) == b"\x00\xe0\x12\x00"


class TestFetch:
    """Test instruction fetch."""

    def test_big_endian_and_advance(self, fresh_state):
        state = load_rom(fresh_state, assemble(0xA2F0))

        state, instruction = fetch(state)

        assert instruction == 0xA2F0
        assert state.pc == PROGRAM_START + 2

    def test_last_full_word(self, fresh_state):
        state = fresh_state.replace(
            memory=fresh_state.memory.at[0xFFE].set(0x12).at[0xFFF].set(0x34),
            pc=jnp.asarray(0xFFE, dtype=jnp.uint16),
        )
        _, instruction = fetch(state)
        assert instruction == 0x1234

    def test_word_past_memory_end(self, fresh_state):
        state = fresh_state.replace(pc=jnp.asarray(0xFFF, dtype=jnp.uint16))
        with pytest.raises(InvalidAddress):
            fetch(state)


class TestTimers:
    """Test timer countdown."""

    def test_tick_decrements_both(self, fresh_state):
        state = fresh_state.replace(
            delay_timer=jnp.asarray(3, dtype=jnp.uint8),
            sound_timer=jnp.asarray(1, dtype=jnp.uint8),
        )
        state = tick_timers(state)
        assert state.delay_timer == 2
        assert state.sound_timer == 0

    def test_tick_stops_at_zero(self, fresh_state):
        state = tick_timers(tick_timers(fresh_state))
        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_timers_tick_before_dispatch(self, fresh_state):
        """FX07 sees the already decremented delay timer."""
        state = load_rom(fresh_state, assemble(0xF007))
        state = state.replace(delay_timer=jnp.asarray(5, dtype=jnp.uint8))

        state = step(state)

        assert state.V[0] == 4
        assert state.delay_timer == 4

    def test_timer_written_this_step_is_not_ticked(self, fresh_state):
        state = load_rom(fresh_state, assemble(0x6005, 0xF015))

        state = step(step(state))

        assert state.delay_timer == 5

    def test_step_without_tick(self, fresh_state):
        state = load_rom(fresh_state, assemble(0x6000))
        state = state.replace(sound_timer=jnp.asarray(9, dtype=jnp.uint8))

        state = step(state, tick=False)

        assert state.sound_timer == 9
