"""CHIP-8 instruction decoding."""

import enum

from chex import dataclass


class Operation(enum.Enum):
    """Every operation the engine knows how to execute."""
    ERROR = enum.auto()

    CLS = enum.auto()          # 00E0 clear the screen
    RET = enum.auto()          # 00EE return from subroutine
    JUMP = enum.auto()         # 1NNN jump to NNN
    CALL = enum.auto()         # 2NNN call subroutine at NNN
    SKIP_EQ = enum.auto()      # 3XNN skip if VX == NN
    SKIP_NE = enum.auto()      # 4XNN skip if VX != NN
    SKIP_REG_EQ = enum.auto()  # 5XY0 skip if VX == VY
    LOAD = enum.auto()         # 6XNN VX = NN
    ADD = enum.auto()          # 7XNN VX += NN, no flag

    MOVE = enum.auto()         # 8XY0 VX = VY
    OR = enum.auto()           # 8XY1 VX |= VY
    AND = enum.auto()          # 8XY2 VX &= VY
    XOR = enum.auto()          # 8XY3 VX ^= VY
    ADD_REG = enum.auto()      # 8XY4 VX += VY, VF = carry
    SUB = enum.auto()          # 8XY5 VX -= VY, VF = no borrow
    SHR = enum.auto()          # 8XY6 VX >>= 1, VF = bit shifted out
    RSUB = enum.auto()         # 8XY7 VX = VY - VX, VF = no borrow
    SHL = enum.auto()          # 8XYE VX <<= 1, VF = bit shifted out

    SKIP_REG_NE = enum.auto()  # 9XY0 skip if VX != VY
    LOAD_INDEX = enum.auto()   # ANNN I = NNN
    JUMP_V0 = enum.auto()      # BNNN jump to NNN + V0
    RAND = enum.auto()         # CXNN VX = random & NN
    DRAW = enum.auto()         # DXYN draw sprite

    SKIP_KEY = enum.auto()     # EX9E skip if key VX pressed
    SKIP_NO_KEY = enum.auto()  # EXA1 skip if key VX not pressed

    MOVE_DELAY = enum.auto()   # FX07 VX = delay timer
    WAIT_KEY = enum.auto()     # FX0A wait for a key, store it in VX
    LOAD_DELAY = enum.auto()   # FX15 delay timer = VX
    LOAD_SOUND = enum.auto()   # FX18 sound timer = VX
    ADD_INDEX = enum.auto()    # FX1E I += VX
    LOAD_CHAR = enum.auto()    # FX29 I = font glyph for VX
    BCD = enum.auto()          # FX33 BCD of VX at I..I+2
    STORE = enum.auto()        # FX55 store V0..VX at I
    READ = enum.auto()         # FX65 read V0..VX from I


# Groups that map one-to-one on the top nibble
_GROUP_TABLE = {
    0x1: Operation.JUMP,
    0x2: Operation.CALL,
    0x3: Operation.SKIP_EQ,
    0x4: Operation.SKIP_NE,
    0x5: Operation.SKIP_REG_EQ,
    0x6: Operation.LOAD,
    0x7: Operation.ADD,
    0x9: Operation.SKIP_REG_NE,
    0xA: Operation.LOAD_INDEX,
    0xB: Operation.JUMP_V0,
    0xC: Operation.RAND,
    0xD: Operation.DRAW,
}

# Group 0x0, keyed by the full word
_SYSTEM_TABLE = {
    0x00E0: Operation.CLS,
    0x00EE: Operation.RET,
}

# Group 0x8, keyed by the low nibble
_ALU_TABLE = {
    0x0: Operation.MOVE,
    0x1: Operation.OR,
    0x2: Operation.AND,
    0x3: Operation.XOR,
    0x4: Operation.ADD_REG,
    0x5: Operation.SUB,
    0x6: Operation.SHR,
    0x7: Operation.RSUB,
    0xE: Operation.SHL,
}

# Group 0xE, keyed by the low byte
_KEY_TABLE = {
    0x9E: Operation.SKIP_KEY,
    0xA1: Operation.SKIP_NO_KEY,
}

# Group 0xF, keyed by the low byte
_MISC_TABLE = {
    0x07: Operation.MOVE_DELAY,
    0x0A: Operation.WAIT_KEY,
    0x15: Operation.LOAD_DELAY,
    0x18: Operation.LOAD_SOUND,
    0x1E: Operation.ADD_INDEX,
    0x29: Operation.LOAD_CHAR,
    0x33: Operation.BCD,
    0x55: Operation.STORE,
    0x65: Operation.READ,
}


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    operation: Operation
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate)
    arg: int     # Last byte (8-bit immediate)
    addr: int    # Last 12 bits (12-bit address)

    @property
    def is_error(self) -> bool:
        return self.operation is Operation.ERROR


def decode_operation(opcode: int, word: int) -> Operation:
    """Map a 16-bit word to its operation, or ``Operation.ERROR``."""
    if opcode in _GROUP_TABLE:
        return _GROUP_TABLE[opcode]
    if opcode == 0x0:
        return _SYSTEM_TABLE.get(word, Operation.ERROR)
    if opcode == 0x8:
        return _ALU_TABLE.get(word & 0x000F, Operation.ERROR)
    if opcode == 0xE:
        return _KEY_TABLE.get(word & 0x00FF, Operation.ERROR)
    return _MISC_TABLE.get(word & 0x00FF, Operation.ERROR)


def decode(msb: int, lsb: int) -> DecodedInstruction:
    """Decode an instruction from its two big-endian bytes."""
    word = ((msb & 0xFF) << 8) | (lsb & 0xFF)
    return decode_word(word)


def decode_word(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    instruction = int(instruction) & 0xFFFF
    opcode = (instruction & 0xF000) >> 12
    return DecodedInstruction(
        raw=instruction,
        operation=decode_operation(opcode, instruction),
        opcode=opcode,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        arg=instruction & 0x00FF,
        addr=instruction & 0x0FFF,
    )


_MNEMONICS = {
    Operation.ERROR: "??? {raw:#06x}",
    Operation.CLS: "CLS",
    Operation.RET: "RET",
    Operation.JUMP: "JP {addr:#05x}",
    Operation.CALL: "CALL {addr:#05x}",
    Operation.SKIP_EQ: "SE V{x:X}, {arg:#04x}",
    Operation.SKIP_NE: "SNE V{x:X}, {arg:#04x}",
    Operation.SKIP_REG_EQ: "SE V{x:X}, V{y:X}",
    Operation.LOAD: "LD V{x:X}, {arg:#04x}",
    Operation.ADD: "ADD V{x:X}, {arg:#04x}",
    Operation.MOVE: "LD V{x:X}, V{y:X}",
    Operation.OR: "OR V{x:X}, V{y:X}",
    Operation.AND: "AND V{x:X}, V{y:X}",
    Operation.XOR: "XOR V{x:X}, V{y:X}",
    Operation.ADD_REG: "ADD V{x:X}, V{y:X}",
    Operation.SUB: "SUB V{x:X}, V{y:X}",
    Operation.SHR: "SHR V{x:X}",
    Operation.RSUB: "SUBN V{x:X}, V{y:X}",
    Operation.SHL: "SHL V{x:X}",
    Operation.SKIP_REG_NE: "SNE V{x:X}, V{y:X}",
    Operation.LOAD_INDEX: "LD I, {addr:#05x}",
    Operation.JUMP_V0: "JP V0, {addr:#05x}",
    Operation.RAND: "RND V{x:X}, {arg:#04x}",
    Operation.DRAW: "DRW V{x:X}, V{y:X}, {n}",
    Operation.SKIP_KEY: "SKP V{x:X}",
    Operation.SKIP_NO_KEY: "SKNP V{x:X}",
    Operation.MOVE_DELAY: "LD V{x:X}, DT",
    Operation.WAIT_KEY: "LD V{x:X}, K",
    Operation.LOAD_DELAY: "LD DT, V{x:X}",
    Operation.LOAD_SOUND: "LD ST, V{x:X}",
    Operation.ADD_INDEX: "ADD I, V{x:X}",
    Operation.LOAD_CHAR: "LD F, V{x:X}",
    Operation.BCD: "LD B, V{x:X}",
    Operation.STORE: "LD [I], V{x:X}",
    Operation.READ: "LD V{x:X}, [I]",
}


def disassemble(instruction: DecodedInstruction) -> str:
    """Render a decoded instruction as assembly text."""
    return _MNEMONICS[instruction.operation].format(
        raw=instruction.raw,
        x=instruction.x,
        y=instruction.y,
        n=instruction.n,
        arg=instruction.arg,
        addr=instruction.addr,
    )
