"""Tests for the fetch-decode-execute cycle."""

import pytest
from chix8 import (
    create_state, decode, fetch, step, run_instructions,
    OutOfBoundsAccess, UnknownOpcode,
)
from conftest import state_with_rom


class TestDecode:
    """Test instruction decoding."""

    def test_fields(self):
        inst = decode(0xD12F)
        assert inst.raw == 0xD12F
        assert inst.opcode == 0xD
        assert inst.x == 0x1
        assert inst.y == 0x2
        assert inst.n == 0xF
        assert inst.nn == 0x2F
        assert inst.nnn == 0x12F

    def test_decode_is_pure(self):
        assert decode(0x8AB4) == decode(0x8AB4)


class TestFetch:
    """Test instruction fetch."""

    def test_fetch_is_big_endian(self):
        state = state_with_rom([0x12, 0x34])
        state, instruction = fetch(state)
        assert instruction == 0x1234
        assert state.pc == 0x202

    def test_fetch_last_word(self, fresh_state):
        state = fresh_state.replace(
            pc=fresh_state.pc * 0 + 4094,
            memory=fresh_state.memory.at[4094].set(0xAB).at[4095].set(0xCD),
        )
        state, instruction = fetch(state)
        assert instruction == 0xABCD

    def test_fetch_past_memory(self, fresh_state):
        state = fresh_state.replace(pc=fresh_state.pc * 0 + 4095)
        with pytest.raises(OutOfBoundsAccess):
            fetch(state)


class TestStep:
    """Test single cycles."""

    def test_load_immediate_rom(self):
        state = step(state_with_rom([0x6A, 0x15]))
        assert state.V[0xA] == 0x15
        assert state.pc == 0x202
        assert state.cycles_emulated == 1

    def test_unknown_opcode_reports_address(self):
        state = step(state_with_rom([0x6A, 0x15]))
        # Memory after the ROM is zero, and 0x0000 is not an instruction
        with pytest.raises(UnknownOpcode) as excinfo:
            step(state)
        assert excinfo.value.address == 0x202
        assert excinfo.value.opcode == 0x0000

    def test_observer_sees_address_before_execution(self):
        seen = []
        state = state_with_rom([0x6A, 0x15, 0x7A, 0x01])
        state = run_instructions(state, 2, lambda address, inst: seen.append((address, inst.raw)))
        assert seen == [(0x200, 0x6A15), (0x202, 0x7A01)]
        assert state.V[0xA] == 0x16

    def test_observer_called_for_failing_instruction(self):
        seen = []
        with pytest.raises(UnknownOpcode):
            step(state_with_rom([0xFF, 0xFF]), lambda address, inst: seen.append(inst.raw))
        assert seen == [0xFFFF]

    def test_step_does_not_tick_timers(self):
        state = state_with_rom([0x60, 0x05, 0xF0, 0x15, 0x61, 0x01])
        state = run_instructions(state, 3)
        assert state.delay_timer == 5

    def test_state_is_not_mutated(self):
        initial = state_with_rom([0x6A, 0x15])
        step(initial)
        assert initial.V[0xA] == 0
        assert initial.pc == 0x200
        assert initial.cycles_emulated == 0


class TestPrograms:
    """Small end-to-end programs."""

    def test_count_loop(self):
        rom = [
            0x60, 0x00,  # 0x200: V0 = 0
            0x70, 0x01,  # 0x202: V0 += 1
            0x30, 0x05,  # 0x204: skip if V0 == 5
            0x12, 0x02,  # 0x206: jump 0x202
            0x12, 0x08,  # 0x208: halt loop
        ]
        state = run_instructions(state_with_rom(rom), 1 + 5 * 3 + 2)
        assert state.V[0] == 5
        assert state.pc == 0x208

    def test_draw_font_digit(self):
        rom = [
            0x60, 0x00,  # V0 = 0
            0xF0, 0x29,  # I = font(0)
            0xD0, 0x05,  # draw 8x5 at (0, 0)
        ]
        state = run_instructions(state_with_rom(rom), 3)
        # "0" glyph is F0 90 90 90 F0
        assert state.display[0:4, 0].tolist() == [True] * 4
        assert state.display[0:4, 1].tolist() == [True, False, False, True]
        assert state.V[0xF] == 0

    def test_subroutine_and_bcd(self):
        rom = [
            0x22, 0x06,  # 0x200: call 0x206
            0x12, 0x04,  # 0x202: return lands here
            0x12, 0x04,  # 0x204: loop
            0x60, 0xFE,  # 0x206: V0 = 254
            0xA3, 0x00,  # 0x208: I = 0x300
            0xF0, 0x33,  # 0x20A: BCD
            0x00, 0xEE,  # 0x20C: return
        ]
        state = run_instructions(state_with_rom(rom), 5)
        assert state.pc == 0x202
        assert state.memory[0x300:0x303].tolist() == [2, 5, 4]
        assert state.stack.pointer == 0

    def test_same_seed_same_random_sequence(self):
        rom = [0xC0, 0xFF, 0xC1, 0xFF, 0xC2, 0xFF]
        first = run_instructions(state_with_rom(rom), 3)
        second = run_instructions(state_with_rom(rom), 3)
        assert first.V.tolist() == second.V.tolist()

    def test_fresh_state_has_font(self):
        state = create_state()
        assert state.memory[0:5].tolist() == [0xF0, 0x90, 0x90, 0x90, 0xF0]
        assert state.pc == 0x200
