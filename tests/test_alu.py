"""Tests for ALU operations (8xxx)."""

import pytest
from chipjax import execute, FAULT_NONE, FAULT_UNKNOWN_INSTRUCTION
from conftest import set_registers


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_set_preserves_vf(self, fresh_state):
        """8XY0 - VF is not a flag output of a plain copy."""
        state = set_registers(fresh_state, V2=0x10, VF=1)

        state = execute(state, 0x8120)

        assert state.V[1] == 0x10
        assert state.V[15] == 1

    def test_alu_set_into_vf(self, fresh_state):
        """8FY0 - Copying into VF keeps the copied value."""
        state = set_registers(fresh_state, V2=0x37, VF=1)

        state = execute(state, 0x8F20)

        assert state.V[15] == 0x37

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation resets VF."""
        state = set_registers(fresh_state, V1=0xF0, V2=0x0F, VF=1)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation resets VF."""
        state = set_registers(fresh_state, V1=0xF0, V2=0xF1, VF=1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0
        assert state.V[15] == 0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation resets VF."""
        state = set_registers(fresh_state, V1=0xFF, V2=0xF0, VF=1)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F
        assert state.V[15] == 0


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - 200 + 100 wraps to 44 with carry."""
        state = set_registers(fresh_state, V1=200, V2=100)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 44
        assert state.V[15] == 1

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - 1 + 1 without carry."""
        state = set_registers(fresh_state, V1=1, V2=1, VF=1)

        state = execute(state, 0x8124)

        assert state.V[1] == 2
        assert state.V[15] == 0

    def test_alu_add_exact_overflow(self, fresh_state):
        """8XY4 - 0xFF + 0x01 wraps to zero."""
        state = set_registers(fresh_state, V1=0xFF, V2=0x01)

        state = execute(state, 0x8124)

        assert state.V[1] == 0x00
        assert state.V[15] == 1

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - 5 - 3, no borrow."""
        state = set_registers(fresh_state, V1=5, V2=3)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 2
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - 3 - 5 borrows and wraps to 254."""
        state = set_registers(fresh_state, V1=3, V2=5, VF=1)

        state = execute(state, 0x8125)

        assert state.V[1] == 254
        assert state.V[15] == 0

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = set_registers(fresh_state, V1=7, V2=7)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = set_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20
        assert state.V[15] == 1

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX with borrow."""
        state = set_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8127)

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Shifts read VY and write the result to VX."""

    def test_shift_right_uses_vy(self, fresh_state):
        """8XY6 - VX = VY >> 1, VF = old bit 0 of VY."""
        state = set_registers(fresh_state, V5=0x08, V6=0x03)

        state = execute(state, 0x8566)

        assert state.V[5] == 0x01
        assert state.V[6] == 0x03
        assert state.V[15] == 1

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Even VY shifts out a zero."""
        state = set_registers(fresh_state, V2=0x04, VF=1)

        state = execute(state, 0x8126)

        assert state.V[1] == 0x02
        assert state.V[15] == 0

    def test_shift_left_uses_vy(self, fresh_state):
        """8XYE - VX = VY << 1 wrapping, VF = old bit 7 of VY."""
        state = set_registers(fresh_state, V3=0x00, V4=0x81)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Bit 7 clear gives VF = 0."""
        state = set_registers(fresh_state, V4=0x41, VF=1)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN operations are reported and change nothing."""
        state = set_registers(fresh_state, V1=0x42, V2=0x99, VF=0x07)

        state = execute(state, 0x8120 | op)

        assert state.V[1] == 0x42, f"Undefined op {op:X} changed VX"
        assert state.V[15] == 0x07, f"Undefined op {op:X} changed VF"
        assert state.fault == FAULT_UNKNOWN_INSTRUCTION

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = set_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = set_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"
        assert state.fault == FAULT_NONE

    def test_vf_as_destination_keeps_flag(self, fresh_state):
        """8FY4 - The flag is written after the result, so VF holds the carry."""
        state = set_registers(fresh_state, VF=0xFF, V1=0x01)

        state = execute(state, 0x8F14)

        assert state.V[15] == 1

    def test_vf_register_operations(self, fresh_state):
        """Test that operations reading VF work correctly."""
        state = set_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"
