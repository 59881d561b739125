import logging

from chip8.constants import (
    C8_FONTS,
    FONT_START_ADDRESS,
    MEMORY_SIZE,
    ROM_START_ADDRESS,
    STACK_ENTRY_SIZE,
    STACK_LIMIT,
    STACK_MAX_DEPTH,
    STACK_TOP,
)
from chip8.errors import ProgramTooLargeError, StackOverflowError, StackUnderflowError

logger = logging.getLogger(__name__)


def program_words(data: bytes) -> list:
    """split a ROM into big-endian 16-bit opcodes, odd lengths get a trailing zero byte"""
    data = bytes(data)
    if len(data) % 2 == 1:
        data += b"\x00"
    return [data[i] << 8 | data[i + 1] for i in range(0, len(data), 2)]


# ********** WRAPS A LIST TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
# the call stack lives inside the same address space, growing downward from 0x0EFF
class Memory:
    def __init__(self):
        self.inner = [0] * MEMORY_SIZE
        self.stack_ptr = STACK_TOP     # points at the most recently pushed entry
        self.load_fonts()

    def __getitem__(self, index):
        return self.read(index)

    def __setitem__(self, key, value):
        self.write(key, value)

    def __len__(self):
        return len(self.inner)

    def __repr__(self):
        return f"Memory(stack_ptr=0x{self.stack_ptr:04x}, stack_depth={self.stack_depth})"

    def read(self, addr: int) -> int:
        assert 0 <= addr < MEMORY_SIZE, f"memory address 0x{addr:x} out of range"
        return self.inner[addr]

    def write(self, addr: int, value: int):
        assert 0 <= addr < MEMORY_SIZE, f"memory address 0x{addr:x} out of range"
        self.inner[addr] = value & 0xFF

    def read_word(self, addr: int) -> int:
        """read a big-endian 16-bit value, i.e. an opcode"""
        return self.read(addr) << 8 | self.read(addr + 1)

    def load_fonts(self):
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS + len(C8_FONTS)] = C8_FONTS

    def load_program(self, data: bytes):
        """copy a ROM verbatim at 0x200, raise if it would run into the stack region"""
        words = program_words(data)
        size = len(words) * 2
        if ROM_START_ADDRESS + size > STACK_LIMIT:
            raise ProgramTooLargeError(
                f"{size} bytes do not fit between 0x{ROM_START_ADDRESS:03x} and 0x{STACK_LIMIT:03x}"
            )
        for i, opcode in enumerate(words):
            self.write(ROM_START_ADDRESS + 2 * i, opcode >> 8)
            self.write(ROM_START_ADDRESS + 2 * i + 1, opcode & 0xFF)
        logger.info("loaded %d bytes at 0x%03x", size, ROM_START_ADDRESS)

    # ********** STACK
    @property
    def stack_depth(self) -> int:
        return (STACK_TOP - self.stack_ptr) // STACK_ENTRY_SIZE

    def push(self, address: int):
        if self.stack_depth >= STACK_MAX_DEPTH:
            raise StackOverflowError(
                f"the CHIP-8 stack can contain at most {STACK_MAX_DEPTH} addresses"
            )
        self.stack_ptr -= STACK_ENTRY_SIZE
        self.write(self.stack_ptr, (address >> 8) & 0xFF)
        self.write(self.stack_ptr + 1, address & 0xFF)

    def pop(self) -> int:
        if self.stack_depth == 0:
            raise StackUnderflowError("return with an empty stack")
        address = self.read_word(self.stack_ptr)
        self.stack_ptr += STACK_ENTRY_SIZE
        return address
