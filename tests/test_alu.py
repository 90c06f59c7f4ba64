"""Tests for ALU operations (8xxx)."""

import pytest
from octocore import execute
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state, io):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120, io)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state, io):
        """8XY1 - OR operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121, io)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state, io):
        """8XY2 - AND operation."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, 0x8122, io)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_same(self, fresh_state, io):
        """8XY3 - XOR with same value should be 0."""
        state = set_registers(fresh_state, V3=0xAA, V4=0xAA)

        state = execute(state, 0x8343, io)  # V3 ^= V4

        assert state.V[3] == 0x00

    def test_logic_leaves_flag_alone(self, fresh_state, io):
        """8XY1/2/3 - Bitwise operations do not touch VF."""
        for instruction in (0x8121, 0x8122, 0x8123, 0x8120):
            state = set_registers(fresh_state, V1=0x0F, V2=0xF0, VF=0x07)
            state = execute(state, instruction, io)
            assert state.V[15] == 0x07, f"{instruction:04X} changed VF"


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state, io):
        """8XY4 - Add without carry."""
        state = set_registers(fresh_state, V1=0x10, V2=0x20)

        state = execute(state, 0x8124, io)  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state, io):
        """8XY4 - Add with carry."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)

        state = execute(state, 0x8124, io)  # V1 += V2

        assert state.V[1] == 0x00  # 256 wraps to 0
        assert state.V[15] == 1  # Carry set

    def test_add_255_then_1_wraps_back(self, fresh_state, io):
        """8XY4 - Adding 255 then 1 returns to the starting value."""
        for start in (0x00, 0x01, 0x7F, 0xFE):
            state = set_registers(fresh_state, V1=start, V2=0xFF, V3=0x01)

            state = execute(state, 0x8124, io)  # V1 += 255
            assert state.V[1] == (start + 0xFF) & 0xFF
            assert state.V[15] == int(start + 0xFF > 0xFF)

            state = execute(state, 0x8134, io)  # V1 += 1
            assert state.V[1] == start
            assert state.V[15] == int(((start + 0xFF) & 0xFF) + 1 > 0xFF)

    def test_alu_sub_xy_no_borrow(self, fresh_state, io):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = set_registers(fresh_state, V1=5, V2=3)

        state = execute(state, 0x8125, io)  # V1 -= V2

        assert state.V[1] == 2
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state, io):
        """8XY5 - Subtract VX - VY, with borrow."""
        state = set_registers(fresh_state, V1=3, V2=5)

        state = execute(state, 0x8125, io)  # V1 -= V2

        assert state.V[1] == 254
        assert state.V[15] == 0

    def test_alu_sub_yx_no_borrow(self, fresh_state, io):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127, io)  # V1 = V2 - V1

        assert state.V[1] == 0x20
        assert state.V[15] == 1

    def test_alu_sub_yx_with_borrow(self, fresh_state, io):
        """8XY7 - Subtract VY - VX, with borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8127, io)  # V1 = V2 - V1

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_carries_out_low_bit(self, fresh_state, io):
        """8XY6 - Shift right of 0x01."""
        state = set_registers(fresh_state, V3=0x01, V4=0xFF)

        state = execute(state, 0x8346, io)  # V3 >>= 1

        assert state.V[3] == 0
        assert state.V[15] == 1

    def test_shift_right_even(self, fresh_state, io):
        """8XY6 - Shift right ignores VY."""
        state = set_registers(fresh_state, V1=0x04, V2=0xFF)

        state = execute(state, 0x8126, io)

        assert state.V[1] == 0x02
        assert state.V[15] == 0

    def test_shift_left_carries_out_high_bit(self, fresh_state, io):
        """8XYE - Shift left of 0x80."""
        state = set_registers(fresh_state, V3=0x80)

        state = execute(state, 0x834E, io)  # V3 <<= 1

        assert state.V[3] == 0
        assert state.V[15] == 1

    def test_shift_left_overflow(self, fresh_state, io):
        """8XYE - Shift left keeps the low bits."""
        state = set_registers(fresh_state, V3=0x81)

        state = execute(state, 0x834E, io)

        assert state.V[3] == 0x02
        assert state.V[15] == 1


class TestFlagAliasing:
    """Operands are read before any write and the flag is written last."""

    def test_alu_self_operations(self, fresh_state, io):
        """VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)
        state = execute(state, 0x8553, io)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554, io)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_as_source(self, fresh_state, io):
        """VY is VF: the sum uses the old VF, then VF becomes the carry."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4, io)  # V1 += VF

        assert state.V[1] == 0x52
        assert state.V[15] == 0

    @pytest.mark.parametrize("instruction, vf, vy, expected_flag", [
        (0x8F14, 0xFF, 0x01, 1),  # VF += V1 with carry
        (0x8F14, 0x01, 0x01, 0),  # VF += V1 without carry
        (0x8F15, 0x05, 0x03, 1),  # VF -= V1
        (0x8F17, 0x05, 0x03, 0),  # VF = V1 - VF
        (0x8F06, 0x03, 0x00, 1),  # VF >>= 1
        (0x8F0E, 0x40, 0x00, 0),  # VF <<= 1
    ])
    def test_vf_as_destination_keeps_flag(self, fresh_state, io, instruction, vf, vy, expected_flag):
        """VX is VF: the flag overwrites the result."""
        state = set_registers(fresh_state, VF=vf, V0=vy, V1=vy)

        state = execute(state, instruction, io)

        assert state.V[15] == expected_flag
