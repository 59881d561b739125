"""Opcode decoding.

decode() turns any 16-bit word into an Instruction. It never fails: words that
match no CHIP-8 form come back as Unknown and it is up to the executing CPU to
treat them as fatal.

Instructions describe their operands with targets, small values naming where a
value is read from or written to (a register, a constant, a timer, ...), so
that most of the instruction set collapses into a handful of instruction
shapes: Assignment, ALUOperation and CompareEq.
"""
from dataclasses import dataclass
from enum import Enum


# ******************** TARGETS
@dataclass(frozen=True)
class IRegister:
    def __str__(self):
        return "I"


@dataclass(frozen=True)
class VRegister:
    index: int

    def __str__(self):
        return f"V{self.index:X}"


@dataclass(frozen=True)
class MemoryAddress:
    addr: int

    def __str__(self):
        return f"[0x{self.addr:03x}]"


@dataclass(frozen=True)
class Constant:
    value: int

    def __str__(self):
        return f"0x{self.value:02x}"


@dataclass(frozen=True)
class CurrentKeyPressed:
    def __str__(self):
        return "K"


@dataclass(frozen=True)
class KeyState:
    """1 when the key whose number is stored in V[index] is held, else 0"""
    index: int

    def __str__(self):
        return f"KEY[V{self.index:X}]"


@dataclass(frozen=True)
class DelayTimer:
    def __str__(self):
        return "DT"


@dataclass(frozen=True)
class SoundTimer:
    def __str__(self):
        return "ST"


@dataclass(frozen=True)
class SpriteAddress:
    """address of the font glyph for the digit stored in V[index]"""
    index: int

    def __str__(self):
        return f"F(V{self.index:X})"


@dataclass(frozen=True)
class RandomNum:
    mask: int

    def __str__(self):
        return f"RND & 0x{self.mask:02x}"


# ******************** INSTRUCTIONS
class ALUOp(Enum):
    ASSIGN = "LD"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD = "ADD"
    SUBTRACT = "SUB"
    SHIFT_RIGHT = "SHR"
    SUBTRACT_FLIPPED = "SUBN"
    SHIFT_LEFT = "SHL"
    UNKNOWN = "???"


@dataclass(frozen=True)
class CallMachineCode:
    addr: int

    @property
    def asm(self):
        return f"SYS 0x{self.addr:03x}"


@dataclass(frozen=True)
class ClearDisplay:
    asm = "CLS"


@dataclass(frozen=True)
class Return:
    asm = "RET"


@dataclass(frozen=True)
class Jump:
    addr: Constant

    @property
    def asm(self):
        return f"JP 0x{self.addr.value:03x}"


@dataclass(frozen=True)
class CallSubroutine:
    addr: Constant

    @property
    def asm(self):
        return f"CALL 0x{self.addr.value:03x}"


@dataclass(frozen=True)
class CompareEq:
    """skip the next instruction when (left == right) == eq"""
    eq: bool
    left: object
    right: object

    @property
    def asm(self):
        return f"{'SE' if self.eq else 'SNE'} {self.left}, {self.right}"


@dataclass(frozen=True)
class Assignment:
    to: object
    source: object

    @property
    def asm(self):
        return f"LD {self.to}, {self.source}"


@dataclass(frozen=True)
class ALUOperation:
    """left = left <op> right, VF gets the op's flag only when flagged"""
    op: ALUOp
    left: object
    right: object
    flagged: bool = True

    @property
    def asm(self):
        if self.op in (ALUOp.SHIFT_RIGHT, ALUOp.SHIFT_LEFT):
            return f"{self.op.value} {self.left}"
        return f"{self.op.value} {self.left}, {self.right}"


@dataclass(frozen=True)
class SpecialJump:
    offset: Constant

    @property
    def asm(self):
        return f"JP V0, 0x{self.offset.value:03x}"


@dataclass(frozen=True)
class Draw:
    x_reg: VRegister
    y_reg: VRegister
    height: Constant

    @property
    def asm(self):
        return f"DRW {self.x_reg}, {self.y_reg}, {self.height.value}"


@dataclass(frozen=True)
class BCD:
    x_reg: VRegister

    @property
    def asm(self):
        return f"LD B, {self.x_reg}"


@dataclass(frozen=True)
class RegisterDump:
    x: object

    @property
    def asm(self):
        return f"LD [I], V0-{_last_register(self.x)}"


@dataclass(frozen=True)
class RegisterLoad:
    x: object

    @property
    def asm(self):
        return f"LD V0-{_last_register(self.x)}, [I]"


@dataclass(frozen=True)
class Unknown:
    opcode: int

    @property
    def asm(self):
        return f"??? 0x{self.opcode:04x}"


def _last_register(x):
    return f"V{x.value:X}" if isinstance(x, Constant) else str(x)


# ******************** DECODING
@dataclass(frozen=True)
class Fields:
    """the pieces of an opcode: family (class nibble), NNN, X, Y, N and NN"""
    family: int
    nnn: int
    x: int
    y: int
    n: int
    nn: int

    @classmethod
    def from_opcode(cls, opcode):
        return cls(
            family=(opcode & 0xF000) >> 12,
            nnn=opcode & 0x0FFF,
            x=(opcode & 0x0F00) >> 8,
            y=(opcode & 0x00F0) >> 4,
            n=opcode & 0x000F,
            nn=opcode & 0x00FF,
        )


ALU_OPS = {
    0x0: ALUOp.ASSIGN,
    0x1: ALUOp.OR,
    0x2: ALUOp.AND,
    0x3: ALUOp.XOR,
    0x4: ALUOp.ADD,
    0x5: ALUOp.SUBTRACT,
    0x6: ALUOp.SHIFT_RIGHT,
    0x7: ALUOp.SUBTRACT_FLIPPED,
    0xE: ALUOp.SHIFT_LEFT,
}

# which part of the opcode picks the instruction inside a class
SUB_FIELDS = {
    0x0: lambda f: f.nnn,
    0x5: lambda f: f.n,
    0x8: lambda f: f.n,
    0x9: lambda f: f.n,
    0xE: lambda f: f.nn,
    0xF: lambda f: f.nn,
}

# (class, sub-field) -> builder, sub-field is None for classes that have no sub-field
DECODE_TABLE = {
    (0x0, 0x0E0): lambda f: ClearDisplay(),
    (0x0, 0x0EE): lambda f: Return(),
    (0x1, None): lambda f: Jump(Constant(f.nnn)),
    (0x2, None): lambda f: CallSubroutine(Constant(f.nnn)),
    (0x3, None): lambda f: CompareEq(True, VRegister(f.x), Constant(f.nn)),
    (0x4, None): lambda f: CompareEq(False, VRegister(f.x), Constant(f.nn)),
    (0x5, 0x0): lambda f: CompareEq(True, VRegister(f.x), VRegister(f.y)),
    (0x6, None): lambda f: Assignment(VRegister(f.x), Constant(f.nn)),
    (0x7, None): lambda f: ALUOperation(ALUOp.ADD, VRegister(f.x), Constant(f.nn), flagged=False),
    (0x9, 0x0): lambda f: CompareEq(False, VRegister(f.x), VRegister(f.y)),
    (0xA, None): lambda f: Assignment(IRegister(), Constant(f.nnn)),
    (0xB, None): lambda f: SpecialJump(Constant(f.nnn)),
    (0xC, None): lambda f: Assignment(VRegister(f.x), RandomNum(f.nn)),
    (0xD, None): lambda f: Draw(VRegister(f.x), VRegister(f.y), Constant(f.n)),
    (0xE, 0x9E): lambda f: CompareEq(True, KeyState(f.x), Constant(1)),
    (0xE, 0xA1): lambda f: CompareEq(False, KeyState(f.x), Constant(1)),
    (0xF, 0x07): lambda f: Assignment(VRegister(f.x), DelayTimer()),
    (0xF, 0x0A): lambda f: Assignment(VRegister(f.x), CurrentKeyPressed()),
    (0xF, 0x15): lambda f: Assignment(DelayTimer(), VRegister(f.x)),
    (0xF, 0x18): lambda f: Assignment(SoundTimer(), VRegister(f.x)),
    (0xF, 0x1E): lambda f: ALUOperation(ALUOp.ADD, IRegister(), VRegister(f.x), flagged=False),
    (0xF, 0x29): lambda f: Assignment(IRegister(), SpriteAddress(f.x)),
    (0xF, 0x33): lambda f: BCD(VRegister(f.x)),
    (0xF, 0x55): lambda f: RegisterDump(Constant(f.x)),
    (0xF, 0x65): lambda f: RegisterLoad(Constant(f.x)),
}
DECODE_TABLE.update({
    (0x8, n): (lambda op: lambda f: ALUOperation(op, VRegister(f.x), VRegister(f.y)))(op)
    for n, op in ALU_OPS.items()
})

# used when (class, sub-field) is not in the table
FALLBACKS = {
    0x0: lambda f: CallMachineCode(f.nnn),
    0x8: lambda f: ALUOperation(ALUOp.UNKNOWN, VRegister(f.x), VRegister(f.y)),
}


def decode(opcode: int):
    """map a 16-bit opcode to its Instruction, Unknown when no form matches"""
    assert 0 <= opcode <= 0xFFFF, f"opcode 0x{opcode:x} is wider than 16 bits"
    fields = Fields.from_opcode(opcode)
    sub_field = SUB_FIELDS.get(fields.family, lambda f: None)(fields)
    builder = DECODE_TABLE.get((fields.family, sub_field)) or FALLBACKS.get(fields.family)
    if builder is None:
        return Unknown(opcode)
    return builder(fields)
