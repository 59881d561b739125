from chip8.constants import FLAG_REGISTER, NUM_V_REGISTERS, ROM_START_ADDRESS


class Registers:
    def __init__(self):
        self.v = [0] * NUM_V_REGISTERS
        self.i = 0                      # specify where the sprites reside in memory
        self.pc = ROM_START_ADDRESS

    def __repr__(self):
        return f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.i:04x} | VARIABLE_REGISTERS:{self.v}"

    def get_v(self, reg: int) -> int:
        assert 0 <= reg < NUM_V_REGISTERS, f"V register {reg} out of range"
        return self.v[reg]

    def set_v(self, reg: int, value: int):
        """store the lowest 8 bits of value in Vx"""
        assert 0 <= reg < NUM_V_REGISTERS, f"V register {reg} out of range"
        self.v[reg] = value & 0xFF

    def set_i(self, value: int):
        self.i = value & 0xFFFF

    def set_flag(self, value: int):
        self.set_v(FLAG_REGISTER, value)

    def jump_to(self, address: int):
        self.pc = address & 0xFFFF

    def skip_next_instruction(self):
        self.pc = (self.pc + 0x2) & 0xFFFF
