# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
# https://chip-8.github.io/links/
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908

import os


# ******************** STATIC SECTION
C8_FONTS = [0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
            0x20, 0x60, 0x20, 0x20, 0x70,  # 1
            0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
            0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
            0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
            0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
            0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
            0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
            0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
            0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
            0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
            0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
            0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
            0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
            0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
            0xF0, 0x80, 0xF0, 0x80, 0x80]  # F

FONT_START_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5                 # bytes per glyph, glyph d starts at d * 5

MEMORY_SIZE = 4096
ROM_START_ADDRESS = 0x200

# the stack grows downward, its first entry takes 0x0EFE-0x0EFF
STACK_TOP = 0x0F00
STACK_ENTRY_SIZE = 2
STACK_MAX_DEPTH = 16
STACK_LIMIT = STACK_TOP - STACK_MAX_DEPTH * STACK_ENTRY_SIZE   # 0x0EE0

NUM_V_REGISTERS = 16
FLAG_REGISTER = 0xF
NUM_KEYS = 16
MAX_SPRITE_HEIGHT = 15

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

TIMER_FREQUENCY = 60                # Hz, how often the driver ticks the timers
INSTRUCTIONS_PER_FRAME = 500 // TIMER_FREQUENCY   # ~500 instructions per second, one frame per timer tick
SCALE = 15

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
