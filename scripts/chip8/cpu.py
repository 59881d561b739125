import logging
import random
from enum import Enum
from functools import wraps

from chip8.constants import FONT_GLYPH_SIZE, FONT_START_ADDRESS, NUM_KEYS, ROM_START_ADDRESS
from chip8.decoder import (
    BCD,
    ALUOp,
    ALUOperation,
    Assignment,
    CallMachineCode,
    CallSubroutine,
    ClearDisplay,
    CompareEq,
    Constant,
    CurrentKeyPressed,
    DelayTimer,
    Draw,
    IRegister,
    Jump,
    KeyState,
    MemoryAddress,
    RandomNum,
    RegisterDump,
    RegisterLoad,
    Return,
    SoundTimer,
    SpecialJump,
    SpriteAddress,
    Unknown,
    VRegister,
    decode,
)
from chip8.display import Display, Sprite
from chip8.errors import (
    Chip8Error,
    UnknownALUOperationError,
    UnknownOpcodeError,
    UnsupportedInstructionError,
    VMHaltedError,
)
from chip8.keypad import Keypad
from chip8.memory import Memory
from chip8.registers import Registers
from chip8.timers import Timers

logger = logging.getLogger(__name__)


class StepResult(Enum):
    EXECUTED = "executed"
    WAITING_FOR_KEY = "waiting for key"


# ALU op -> f(left, right) returning (unwrapped result, VF value or None when VF is left alone)
ALU_FUNCTIONS = {
    ALUOp.ASSIGN: lambda l, r: (r, None),
    ALUOp.OR: lambda l, r: (l | r, None),
    ALUOp.AND: lambda l, r: (l & r, None),
    ALUOp.XOR: lambda l, r: (l ^ r, None),
    ALUOp.ADD: lambda l, r: (l + r, 1 if l + r > 0xFF else 0),
    ALUOp.SUBTRACT: lambda l, r: (l - r, 1 if l >= r else 0),
    ALUOp.SUBTRACT_FLIPPED: lambda l, r: (r - l, 1 if r >= l else 0),
    ALUOp.SHIFT_RIGHT: lambda l, r: (l >> 1, l & 0x1),
    ALUOp.SHIFT_LEFT: lambda l, r: (l << 1, (l & 0x80) >> 7),
}

DISPLAY_VIEWS = ("grid", "bytes", "str")


def wrap(value, bits=8):
    """bring an intermediate result (possibly negative or too wide) back into an unsigned register"""
    return value % (1 << bits)


# ******************** UTILITIES SECTION
def asm(fn):
    """decorator to log the ASM of the instruction being executed"""
    @wraps(fn)
    def wrapper_fn(self, instruction):
        mem_addr = self.registers.pc - 2    # pc has already moved past the instruction
        result = fn(self, instruction)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("mem_addr: 0x%04x    instruction: %s", mem_addr, instruction.asm)
        return result
    return wrapper_fn


# ******************** CPU SECTION
class Chip8:
    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.instructions = {
            CallMachineCode: self._call_machine_code,
            ClearDisplay: self._clear_screen,
            Return: self._return,
            Jump: self._jump,
            CallSubroutine: self._call_addr,
            CompareEq: self._skip_if,
            Assignment: self._assign,
            ALUOperation: self._alu,
            SpecialJump: self._jump_plus,
            Draw: self._to_screen,
            BCD: self._bcd_repr,
            RegisterDump: self._store_vregs,
            RegisterLoad: self._load_vregs,
            Unknown: self._unknown,
        }
        self.reset()

    def __str__(self):
        registers = f"{self.registers}"
        stack = f"STACK:{self.memory}"
        timers = f"{self.timers}"
        flags = f"DRAW: {self.draw} | HALTED: {self.halted}"
        return f"{registers}\n{stack}\n{timers}\n{flags}"

    # ********** COLLABORATOR SURFACE
    def reset(self):
        """throw away every piece of state, fonts get loaded again by the fresh memory"""
        self.memory = Memory()
        self.registers = Registers()
        self.timers = Timers()
        self.display = Display()
        self.keypad = Keypad()
        self.draw = False       # set when the display changed since the last read_display()
        self.halted = None
        logger.debug("vm reset")

    def restart(self):
        """run the loaded program again from the top, nothing else is touched"""
        self.registers.pc = ROM_START_ADDRESS

    def load_program(self, data: bytes):
        self.memory.load_program(data)

    def step(self) -> StepResult:
        """fetch, decode and execute one instruction"""
        if self.halted is not None:
            raise VMHaltedError(self.halted)
        # fetch (each instruction is two bytes long)
        mem_addr = self.registers.pc
        opcode = self.memory.read_word(mem_addr)
        self.registers.skip_next_instruction()
        # decode + execute
        instruction = decode(opcode)
        try:
            result = self.instructions[type(instruction)](instruction)
        except Chip8Error as err:
            if err.opcode is None:
                err.opcode = opcode
            self.halted = err
            logger.error("halting at 0x%04x: %s", mem_addr, err)
            raise
        return result or StepResult.EXECUTED

    def run(self, count: int) -> int:
        """execute up to count instructions, stop early while a key read is blocking"""
        executed = 0
        for _ in range(count):
            if self.step() is StepResult.WAITING_FOR_KEY:
                break
            executed += 1
        return executed

    def tick_timers(self) -> bool:
        self.timers.tick()
        return self.sound_active()

    def sound_active(self) -> bool:
        return self.timers.sound_active

    def set_key_state(self, key: int, held: bool):
        self.keypad.set_key(key, held)

    def update_keys(self, states):
        self.keypad.update(states)

    def read_display(self, view="grid"):
        """read the screen, this also clears the draw flag"""
        self.draw = False
        if view == "grid":
            return self.display.as_grid()
        if view == "bytes":
            return self.display.as_bytes()
        if view == "str":
            return self.display.as_str()
        raise ValueError(f"unknown display view {view!r}, expected one of {DISPLAY_VIEWS}")

    # ********** TARGETS
    def _read(self, target):
        if isinstance(target, Constant):
            return target.value
        if isinstance(target, VRegister):
            return self.registers.get_v(target.index)
        if isinstance(target, IRegister):
            return self.registers.i
        if isinstance(target, MemoryAddress):
            return self.memory.read(target.addr)
        if isinstance(target, DelayTimer):
            return self.timers.dt
        if isinstance(target, SoundTimer):
            return self.timers.st
        if isinstance(target, KeyState):
            key = self.registers.get_v(target.index)
            # no key above 0xF exists, so such a key is never held
            return 1 if key < NUM_KEYS and self.keypad.is_pressed(key) else 0
        if isinstance(target, CurrentKeyPressed):
            return self.keypad.first_pressed()
        if isinstance(target, SpriteAddress):
            return FONT_START_ADDRESS + self.registers.get_v(target.index) * FONT_GLYPH_SIZE
        if isinstance(target, RandomNum):
            return self.rng.randint(0, 255) & target.mask
        raise AssertionError(f"{target!r} cannot be read")

    def _write(self, target, value):
        if isinstance(target, VRegister):
            self.registers.set_v(target.index, value)
        elif isinstance(target, IRegister):
            self.registers.set_i(value)
        elif isinstance(target, MemoryAddress):
            self.memory.write(target.addr, value)
        elif isinstance(target, DelayTimer):
            self.timers.dt = value & 0xFF
        elif isinstance(target, SoundTimer):
            self.timers.st = value & 0xFF
        else:
            raise AssertionError(f"{target!r} cannot be written to")

    # ********** INSTRUCTIONS
    @asm
    def _call_machine_code(self, instruction):
        raise UnsupportedInstructionError(
            f"machine code routine at 0x{instruction.addr:03x} cannot be emulated"
        )

    @asm
    def _clear_screen(self, instruction):
        self.display.clear()
        self.draw = True

    @asm
    def _return(self, instruction):
        """return from a subroutine"""
        self.registers.jump_to(self.memory.pop())

    @asm
    def _jump(self, instruction):
        self.registers.jump_to(self._read(instruction.addr))

    @asm
    def _call_addr(self, instruction):
        # pc already points at the instruction following the call
        self.memory.push(self.registers.pc)
        self.registers.jump_to(self._read(instruction.addr))

    @asm
    def _jump_plus(self, instruction):
        v0 = self.registers.get_v(0x0)
        # the target stays inside the 12-bit address space
        self.registers.jump_to((v0 + self._read(instruction.offset)) & 0xFFF)

    @asm
    def _skip_if(self, instruction):
        """skip the following instruction if the comparison matches the instruction's eq"""
        equal = self._read(instruction.left) == self._read(instruction.right)
        if equal == instruction.eq:
            self.registers.skip_next_instruction()

    @asm
    def _assign(self, instruction):
        value = self._read(instruction.source)
        if value is None:
            # no key held: stay on the same instruction until a key is pressed
            self.registers.pc -= 0x2
            return StepResult.WAITING_FOR_KEY
        self._write(instruction.to, value)

    @asm
    def _alu(self, instruction):
        if instruction.op is ALUOp.UNKNOWN:
            raise UnknownALUOperationError("8XYN names no ALU operation")
        left, right = self._read(instruction.left), self._read(instruction.right)
        result, flag = ALU_FUNCTIONS[instruction.op](left, right)
        bits = 16 if isinstance(instruction.left, IRegister) else 8
        self._write(instruction.left, wrap(result, bits))
        # VF is written last so that it wins when it is also the destination
        if instruction.flagged and flag is not None:
            self.registers.set_flag(flag)

    @asm
    def _to_screen(self, instruction):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        x, y = self._read(instruction.x_reg), self._read(instruction.y_reg)
        sprite = Sprite.from_memory(self.memory, self.registers.i, self._read(instruction.height))
        collision = self.display.draw_sprite(x, y, sprite)
        self.registers.set_flag(1 if collision else 0)
        self.draw = True

    @asm
    def _bcd_repr(self, instruction):
        """the hundreds digit of Vx in memory at I, the tens digit at I+1, the ones digit at I+2"""
        value = self._read(instruction.x_reg)
        digits = (value // 100, (value // 10) % 10, value % 10)
        for offset, digit in enumerate(digits):
            self._write(MemoryAddress(self.registers.i + offset), digit)

    @asm
    def _store_vregs(self, instruction):
        """store registers V0 through Vx (included) in memory starting at location I"""
        last = self._read(instruction.x)
        for reg in range(last + 1):
            self._write(MemoryAddress(self.registers.i + reg), self.registers.get_v(reg))

    @asm
    def _load_vregs(self, instruction):
        """read registers V0 through Vx (included) from memory starting at location I"""
        last = self._read(instruction.x)
        for reg in range(last + 1):
            self._write(VRegister(reg), self._read(MemoryAddress(self.registers.i + reg)))

    def _unknown(self, instruction):
        raise UnknownOpcodeError("no instruction matches this opcode", opcode=instruction.opcode)
