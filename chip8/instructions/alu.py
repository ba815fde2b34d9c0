"""CHIP-8 ALU operations (8xxx).

Each operation maps (vx, vy) to (result, vf). A ``vf`` of ``None`` leaves the
flag register untouched. Arithmetic is done on Python ints and truncated to a
byte, with the carry/borrow captured in the flag.
"""

from chip8.decode import DecodedInstruction, Op
from chip8.state import MachineState

FLAG = 0xF


def alu_set(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY6 - Shift right: VX >>= 1, VF = shifted-out bit."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int | None]:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: int) -> tuple[int, int | None]:
    """8XYE - Shift left: VX <<= 1, VF = shifted-out bit."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


ALU_OPERATIONS = {
    Op.LD_REG: alu_set,
    Op.OR: alu_or,
    Op.AND: alu_and,
    Op.XOR: alu_xor,
    Op.ADD_REG: alu_add,
    Op.SUB: alu_sub_xy,
    Op.SHR: alu_shift_right,
    Op.SUBN: alu_sub_yx,
    Op.SHL: alu_shift_left,
}


def make_alu_instruction(operation):
    """Wrap an ALU operation into an instruction handler."""
    def alu_instruction(state: MachineState, instruction: DecodedInstruction) -> MachineState:
        vx = int(state.V[instruction.x])
        vy = int(state.V[instruction.y])
        result, vf = operation(vx, vy)

        new_V = state.V.at[instruction.x].set(result)
        # Flag written last so it wins when X is F.
        if vf is not None:
            new_V = new_V.at[FLAG].set(vf)
        return state.replace(V=new_V)
    alu_instruction.__doc__ = operation.__doc__
    return alu_instruction


ALU_INSTRUCTIONS = {op: make_alu_instruction(operation) for op, operation in ALU_OPERATIONS.items()}
