"""Tests for sprite drawing (DXYN) and the packed framebuffer."""

import jax.numpy as jnp
import pytest

from chip8 import DISPLAY_SIZE, InvalidAddress, execute, framebuffer
from chip8.display import draw_sprite, pixel
from conftest import setup_sprite_in_memory, with_registers


def draw(state, x, y, sprite, address=0x300):
    """Place ``sprite`` at ``address`` and draw it with DXYN using V0/V1."""
    state = setup_sprite_in_memory(state, address, sprite)
    state = with_registers(state, {0: x, 1: y})
    state = state.replace(I=jnp.asarray(address, dtype=jnp.uint16))
    return execute(state, 0xD010 | len(sprite))


class TestDrawInstruction:
    """Test DXYN through the dispatcher."""

    def test_aligned_byte(self, fresh_state):
        state = draw(fresh_state, 0, 0, [0xF0])

        assert framebuffer(state)[0] == 0xF0
        assert state.V[0xF] == 0

    def test_font_glyph(self, loaded_state):
        """Glyph 0 from the font table: F0 90 90 90 F0."""
        state = with_registers(loaded_state, {0: 8, 1: 2})
        state = state.replace(I=jnp.asarray(0, dtype=jnp.uint16))

        state = execute(state, 0xD015)

        fb = framebuffer(state)
        assert [int(fb[row * 8 + 1]) for row in range(2, 7)] == [0xF0, 0x90, 0x90, 0x90, 0xF0]

    def test_draw_twice_erases(self, fresh_state):
        state = draw(fresh_state, 10, 5, [0xFF, 0x81])
        state = draw(state, 10, 5, [0xFF, 0x81])

        assert not jnp.any(framebuffer(state))
        assert state.V[0xF] == 1

    def test_unaligned_spans_two_bytes(self, fresh_state):
        state = draw(fresh_state, 4, 0, [0xFF])

        fb = framebuffer(state)
        assert fb[0] == 0x0F
        assert fb[1] == 0xF0

    def test_right_edge_clips(self, fresh_state):
        state = draw(fresh_state, 60, 0, [0xFF])

        fb = framebuffer(state)
        assert fb[7] == 0x0F
        assert fb[8] == 0x00  # no wrap into the next row
        assert fb[0] == 0x00  # no wrap to the left edge

    @pytest.mark.parametrize("x", [64, 100, 255])
    def test_fully_off_screen_horizontally(self, fresh_state, x):
        state = draw(fresh_state, x, 0, [0xFF])

        assert not jnp.any(framebuffer(state))
        assert state.V[0xF] == 0

    def test_bottom_edge_clips(self, fresh_state):
        state = draw(fresh_state, 0, 30, [0x80, 0x80, 0x80, 0x80, 0x80])

        fb = framebuffer(state)
        assert fb[30 * 8] == 0x80
        assert fb[31 * 8] == 0x80
        assert int(jnp.sum(fb != 0)) == 2

    def test_disjoint_pixels_do_not_collide(self, fresh_state):
        state = draw(fresh_state, 0, 0, [0xF0])
        state = draw(state, 0, 0, [0x0F])

        assert framebuffer(state)[0] == 0xFF
        assert state.V[0xF] == 0

    def test_flag_is_overwritten(self, fresh_state):
        state = with_registers(fresh_state, {0xF: 0x55})
        state = draw(state, 0, 0, [0x80])
        assert state.V[0xF] == 0

    def test_partial_erase_collides(self, fresh_state):
        state = draw(fresh_state, 0, 0, [0xFF])
        state = draw(state, 4, 0, [0xF0])

        assert framebuffer(state)[0] == 0xF0
        assert state.V[0xF] == 1

    def test_sprite_past_memory_end(self, fresh_state):
        state = with_registers(fresh_state, {0: 0, 1: 0})
        state = state.replace(I=jnp.asarray(0xFFE, dtype=jnp.uint16))

        with pytest.raises(InvalidAddress):
            execute(state, 0xD015)

    def test_zero_height_draws_nothing(self, fresh_state):
        state = with_registers(fresh_state, {0xF: 1})
        state = execute(state, 0xD010)

        assert not jnp.any(framebuffer(state))
        assert state.V[0xF] == 0


class TestFramebufferHelpers:
    """Test draw_sprite and pixel directly."""

    def test_draw_sprite_returns_new_buffer(self):
        fb = jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8)

        new_fb, collision = draw_sprite(fb, [0xC0], 62, 31)

        assert not collision
        assert new_fb[31 * 8 + 7] == 0x03
        assert not jnp.any(fb)

    def test_pixel(self):
        fb = jnp.zeros(DISPLAY_SIZE, dtype=jnp.uint8).at[1].set(0x40)

        assert pixel(fb, 9, 0)
        assert not pixel(fb, 8, 0)
        assert not pixel(fb, 64, 0)
        assert not pixel(fb, 0, 32)
