import unittest

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


class TestDecoding(unittest.TestCase):
    def test_system(self):
        self.assertEqual(decode(0x00E0), ClearDisplay())
        self.assertEqual(decode(0x00EE), Return())
        self.assertEqual(decode(0x0123), CallMachineCode(0x123))

    def test_flow(self):
        self.assertEqual(decode(0x1234), Jump(Constant(0x234)))
        self.assertEqual(decode(0x2ABC), CallSubroutine(Constant(0xABC)))
        self.assertEqual(decode(0xB300), SpecialJump(Constant(0x300)))

    def test_skips(self):
        self.assertEqual(decode(0x3A12), CompareEq(True, VRegister(0xA), Constant(0x12)))
        self.assertEqual(decode(0x4A12), CompareEq(False, VRegister(0xA), Constant(0x12)))
        self.assertEqual(decode(0x5AB0), CompareEq(True, VRegister(0xA), VRegister(0xB)))
        self.assertEqual(decode(0x9AB0), CompareEq(False, VRegister(0xA), VRegister(0xB)))
        self.assertEqual(decode(0xE39E), CompareEq(True, KeyState(3), Constant(1)))
        self.assertEqual(decode(0xE3A1), CompareEq(False, KeyState(3), Constant(1)))

    def test_register_compare_needs_zero_nibble(self):
        self.assertEqual(decode(0x5AB1), Unknown(0x5AB1))
        self.assertEqual(decode(0x9ABF), Unknown(0x9ABF))

    def test_assignments(self):
        self.assertEqual(decode(0x6C42), Assignment(VRegister(0xC), Constant(0x42)))
        self.assertEqual(decode(0xA123), Assignment(IRegister(), Constant(0x123)))
        self.assertEqual(decode(0xC20F), Assignment(VRegister(2), RandomNum(0x0F)))
        self.assertEqual(decode(0xF407), Assignment(VRegister(4), DelayTimer()))
        self.assertEqual(decode(0xF40A), Assignment(VRegister(4), CurrentKeyPressed()))
        self.assertEqual(decode(0xF415), Assignment(DelayTimer(), VRegister(4)))
        self.assertEqual(decode(0xF418), Assignment(SoundTimer(), VRegister(4)))
        self.assertEqual(decode(0xF529), Assignment(IRegister(), SpriteAddress(5)))

    def test_alu(self):
        expected = {
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
        for n, op in expected.items():
            self.assertEqual(decode(0x8120 | n), ALUOperation(op, VRegister(1), VRegister(2)))

    def test_unknown_alu(self):
        self.assertEqual(decode(0x8AB9), ALUOperation(ALUOp.UNKNOWN, VRegister(0xA), VRegister(0xB)))

    def test_unflagged_adds(self):
        self.assertEqual(decode(0x7305),
                         ALUOperation(ALUOp.ADD, VRegister(3), Constant(0x05), flagged=False))
        self.assertEqual(decode(0xF31E),
                         ALUOperation(ALUOp.ADD, IRegister(), VRegister(3), flagged=False))

    def test_memory_forms(self):
        self.assertEqual(decode(0xD125), Draw(VRegister(1), VRegister(2), Constant(5)))
        self.assertEqual(decode(0xF733), BCD(VRegister(7)))
        self.assertEqual(decode(0xF355), RegisterDump(Constant(3)))
        self.assertEqual(decode(0xF365), RegisterLoad(Constant(3)))

    def test_unknown(self):
        for opcode in (0xE000, 0xE19F, 0xF0FF, 0xF100, 0xFFFF):
            self.assertEqual(decode(opcode), Unknown(opcode))

    def test_total(self):
        for opcode in range(0x10000):
            self.assertIsInstance(decode(opcode).asm, str)


class TestAsm(unittest.TestCase):
    def test_mnemonics(self):
        self.assertEqual(decode(0x00E0).asm, "CLS")
        self.assertEqual(decode(0x1234).asm, "JP 0x234")
        self.assertEqual(decode(0x631F).asm, "LD V3, 0x1f")
        self.assertEqual(decode(0x8AB4).asm, "ADD VA, VB")
        self.assertEqual(decode(0x8A06).asm, "SHR VA")
        self.assertEqual(decode(0xD125).asm, "DRW V1, V2, 5")
        self.assertEqual(decode(0xF255).asm, "LD [I], V0-V2")
        self.assertEqual(decode(0xFFFF).asm, "??? 0xffff")


if __name__ == "__main__":
    unittest.main()
