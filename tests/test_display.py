"""Tests for display operations (DXYN)."""

import jax.numpy as jnp
import pytest
from chix8 import execute, OutOfBoundsAccess
from conftest import setup_sprite_in_memory


class TestBasicSprites:
    """Test basic sprite drawing."""

    def test_basic_sprite_draw(self, fresh_state):
        """Test basic sprite drawing without collision."""
        state = fresh_state

        # Simple 2x2 box sprite
        sprite = [0xC0, 0xC0]  # 11000000, 11000000
        state = setup_sprite_in_memory(state, 0x300, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xA300)  # I = 0x300

        # Draw sprite: D012 (draw at V0,V1 with height 2)
        state = execute(state, 0xD012)

        assert state.display[10, 5] == 1  # Top-left
        assert state.display[11, 5] == 1  # Top-right
        assert state.display[10, 6] == 1  # Bottom-left
        assert state.display[11, 6] == 1  # Bottom-right
        assert state.display[12, 5] == 0  # Outside sprite
        assert jnp.sum(state.display) == 4

        # No collision should occur
        assert state.V[15] == 0

    def test_collision_detection(self, fresh_state):
        """Test collision flag when sprite overlaps existing pixels."""
        state = fresh_state

        sprite = [0x80]  # 10000000
        state = setup_sprite_in_memory(state, 0x400, sprite)

        state = execute(state, 0x6014)  # V0 = 20
        state = execute(state, 0x610A)  # V1 = 10
        state = execute(state, 0xA400)  # I = 0x400

        # Draw first time - no collision
        state = execute(state, 0xD011)
        assert state.display[20, 10] == 1
        assert state.V[15] == 0

        # Draw again at same location
        state = execute(state, 0xD011)
        assert state.display[20, 10] == 0  # Pixel erased by XOR
        assert state.V[15] == 1  # Collision detected

    def test_draw_twice_erases_everything(self, fresh_state):
        """Drawing a font glyph twice leaves a blank screen and VF = 1."""
        state = execute(fresh_state, 0x6008)  # V0 = 8
        state = execute(state, 0x610F)  # V1 = 15
        state = execute(state, 0x6207)  # V2 = 7
        state = execute(state, 0xF229)  # I = glyph for 7

        state = execute(state, 0xD015)
        assert jnp.sum(state.display) > 0
        assert state.V[15] == 0

        state = execute(state, 0xD015)
        assert jnp.sum(state.display) == 0
        assert state.V[15] == 1

    def test_partial_overlap_sets_collision(self, fresh_state):
        """Only one shared pixel is enough to set VF."""
        state = setup_sprite_in_memory(fresh_state, 0x300, [0xF0])
        state = execute(state, 0xA300)
        state = execute(state, 0xD011)  # Pixels 0-3 on row 0

        state = execute(state, 0x6003)  # V0 = 3
        state = execute(state, 0xD011)  # Pixels 3-6 on row 0

        assert state.V[15] == 1
        assert state.display[2, 0] == 1
        assert state.display[3, 0] == 0
        assert state.display[6, 0] == 1


class TestScreenWrapping:
    """Test sprite wrapping at the screen edges."""

    def test_right_edge_wraps(self, fresh_state):
        """Columns past x = 63 wrap to the left edge."""
        state = setup_sprite_in_memory(fresh_state, 0x600, [0xFF])

        state = execute(state, 0x603C)  # V0 = 60
        state = execute(state, 0x6100)  # V1 = 0
        state = execute(state, 0xA600)  # I = 0x600

        state = execute(state, 0xD011)

        for x in (60, 61, 62, 63, 0, 1, 2, 3):
            assert state.display[x, 0] == 1
        assert state.display[4, 0] == 0
        assert jnp.sum(state.display) == 8

    def test_bottom_edge_wraps(self, fresh_state):
        """Rows past y = 31 wrap to the top."""
        state = setup_sprite_in_memory(fresh_state, 0x700, [0x80, 0x80, 0x80])

        state = execute(state, 0x6000)  # V0 = 0
        state = execute(state, 0x611E)  # V1 = 30
        state = execute(state, 0xA700)  # I = 0x700

        state = execute(state, 0xD013)

        assert state.display[0, 30] == 1
        assert state.display[0, 31] == 1
        assert state.display[0, 0] == 1

    def test_coordinate_wrapping(self, fresh_state):
        """Start coordinates are taken modulo the screen size."""
        state = setup_sprite_in_memory(fresh_state, 0x800, [0x80])

        state = execute(state, 0x6046)  # V0 = 70 (70 % 64 = 6)
        state = execute(state, 0x6125)  # V1 = 37 (37 % 32 = 5)
        state = execute(state, 0xA800)  # I = 0x800

        state = execute(state, 0xD011)

        assert state.display[6, 5] == 1


class TestSpriteVariations:
    """Test different sprite configurations."""

    def test_different_sprite_heights(self, fresh_state):
        """Only N rows are drawn."""
        sprite = [0x80, 0x40, 0x20, 0x10, 0x08]  # Diagonal line
        state = setup_sprite_in_memory(fresh_state, 0x900, sprite)

        state = execute(state, 0x600A)  # V0 = 10
        state = execute(state, 0x6108)  # V1 = 8
        state = execute(state, 0xA900)  # I = 0x900

        state = execute(state, 0xD013)

        assert state.display[10, 8] == 1  # Row 0: 0x80 -> bit 7
        assert state.display[11, 9] == 1  # Row 1: 0x40 -> bit 6
        assert state.display[12, 10] == 1  # Row 2: 0x20 -> bit 5
        assert state.display[13, 11] == 0  # Row 3: not drawn (N=3)

    def test_zero_height_sprite(self, fresh_state):
        """D XY0 draws nothing and clears VF."""
        state = execute(fresh_state, 0x6F01)  # VF = 1
        state = execute(state, 0xD010)

        assert jnp.sum(state.display) == 0
        assert state.V[15] == 0

    def test_vf_register_preservation(self, fresh_state):
        """Test that VF is properly cleared when nothing collides."""
        state = setup_sprite_in_memory(fresh_state, 0xB00, [0x80])

        state = execute(state, 0x6F01)  # VF = 1
        state = execute(state, 0x6005)  # V0 = 5
        state = execute(state, 0x6105)  # V1 = 5
        state = execute(state, 0xAB00)  # I = 0xB00
        state = execute(state, 0xD011)

        assert state.V[15] == 0

    def test_sprite_read_past_memory(self, fresh_state):
        """Reading sprite rows beyond 0xFFF is fatal."""
        state = execute(fresh_state, 0xAFFE)  # I = 0xFFE
        state = execute(state, 0xD012)  # Rows 0xFFE-0xFFF are fine

        with pytest.raises(OutOfBoundsAccess):
            execute(state, 0xD013)
