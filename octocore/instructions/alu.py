"""CHIP-8 ALU operations (8xxx).

Every operation takes the values of VX and VY read before the instruction
writes anything and returns ``(result, flag)``. ``flag`` is ``None`` for
operations that leave VF alone. The result is written to VX first and the
flag to VF last, so a flag always wins when X is F.
"""

from typing import Callable, Optional

from octocore.constants import FLAG_REGISTER
from octocore.state import EmulatorState, set_register
from octocore.decode import DecodedInstruction, Operation
from octocore.peripherals import Peripherals

AluResult = tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > 0xFF)
    return result & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, flag set when nothing was borrowed."""
    no_borrow = int(vx > vy)
    return (vx - vy) & 0xFF, no_borrow


def alu_shift_right(vx: int, vy: int) -> AluResult:
    """8XY6 - Shift right: VX >>= 1."""
    shifted_bit = vx & 0x01
    return vx >> 1, shifted_bit


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, flag set when nothing was borrowed."""
    no_borrow = int(vy > vx)
    return (vy - vx) & 0xFF, no_borrow


def alu_shift_left(vx: int, vy: int) -> AluResult:
    """8XYE - Shift left: VX <<= 1."""
    shifted_bit = (vx & 0x80) >> 7
    return (vx << 1) & 0xFF, shifted_bit


ALU_OPERATIONS: dict[Operation, Callable[[int, int], AluResult]] = {
    Operation.MOVE: alu_set,
    Operation.OR: alu_or,
    Operation.AND: alu_and,
    Operation.XOR: alu_xor,
    Operation.ADD_REG: alu_add,
    Operation.SUB: alu_sub_xy,
    Operation.SHR: alu_shift_right,
    Operation.RSUB: alu_sub_yx,
    Operation.SHL: alu_shift_left,
}


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction, io: Peripherals) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = int(state.V[instruction.x])
    vy = int(state.V[instruction.y])

    result, flag = ALU_OPERATIONS[instruction.operation](vx, vy)

    state = set_register(state, instruction.x, result)
    if flag is not None:
        state = set_register(state, FLAG_REGISTER, flag)
    return state
