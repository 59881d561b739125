import argparse
import logging
import sys

import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame
from pygame.locals import (
    K_0, K_1, K_2, K_3,
    K_4, K_5, K_6, K_7,
    K_8, K_9, K_a, K_b,
    K_c, K_d, K_e, K_f,
)

from chip8.constants import (
    DEBUG,
    INSTRUCTIONS_PER_FRAME,
    ROM_START_ADDRESS,
    SCALE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TIMER_FREQUENCY,
)
from chip8.cpu import Chip8
from chip8.decoder import decode
from chip8.errors import Chip8Error
from chip8.memory import program_words

logger = logging.getLogger(__name__)

KEY_MAPPINGS = {
    K_0: 0x0,
    K_1: 0x1,
    K_2: 0x2,
    K_3: 0x3,
    K_4: 0x4,
    K_5: 0x5,
    K_6: 0x6,
    K_7: 0x7,
    K_8: 0x8,
    K_9: 0x9,
    K_a: 0xA,
    K_b: 0xB,
    K_c: 0xC,
    K_d: 0xD,
    K_e: 0xE,
    K_f: 0xF,
}

SCREEN_FLAGS = pygame.SCALED            # if more than one use | to combine them
BLUE = pygame.Color(80, 69, 155, 255)
LIGHT_BLUE = pygame.Color(136, 126, 203, 255)


# ******************** UTILITIES SECTION
def get_args(argv=None):
    parser = argparse.ArgumentParser(prog="chip8", description="CHIP-8 virtual machine")
    parser.add_argument("-f", "--file", required=True, help="input rom file")
    parser.add_argument("--ipf", type=int, default=INSTRUCTIONS_PER_FRAME,
                        help="instructions executed per frame (%(default)s)")
    parser.add_argument("--scale", type=int, default=SCALE, help="window pixels per CHIP-8 pixel (%(default)s)")
    parser.add_argument("--list", action="store_true", help="print the decoded rom and exit")
    return parser.parse_args(argv)


def load_rom(path):
    """read a ROM file from disk, the vm itself never touches the filesystem"""
    with open(path, mode='rb') as f:
        rom = f.read()
    logger.info("The ROM at path %s has been read (%d bytes)", path, len(rom))
    return rom


def listing(rom):
    """one 'ADDR: OPCODE  MNEMONIC' line per opcode of the rom"""
    lines = []
    for i, opcode in enumerate(program_words(rom)):
        lines.append(f"{ROM_START_ADDRESS + 2 * i:04X}: {opcode:04X}  {decode(opcode).asm}")
    return lines


def setup_logging():
    logging.basicConfig(
        level=logging.DEBUG if DEBUG else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
        stream=sys.stdout,
    )


# ******************** I/O SECTION
class Screen:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, flgs=SCREEN_FLAGS, bg_color=BLUE, fg_color=LIGHT_BLUE):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = pygame.display.set_mode(
            (w * self.scale, h * self.scale), flgs
        )
        self.surface.fill(self.background)

    def write_pixel(self, x, y, color):
        """
        set a pixel on the screen, being it a foreground pixel or a background one
        the change won't be immediatly visible because it'll require a call to the static method refresh
        """
        pygame.draw.rect(
            self.surface,
            self.background if color == 0 else self.foreground,
            (x * self.scale, y * self.scale, self.scale, self.scale)
        )

    def render(self, pixels):
        """paint a row major buffer of 0/1 pixels, as returned by Chip8.read_display('bytes')"""
        for i, pixel in enumerate(pixels):
            self.write_pixel(i % self.w, i // self.w, pixel)
        self.refresh()

    @staticmethod
    def refresh():
        pygame.display.flip()


def handle_event(chip, event):
    """feed one pygame event to the vm, return False when the user asked to quit"""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_MAPPINGS:
            chip.set_key_state(KEY_MAPPINGS[event.key], True)
    elif event.type == pygame.KEYUP and event.key in KEY_MAPPINGS:
        chip.set_key_state(KEY_MAPPINGS[event.key], False)
    elif event.type == pygame.WINDOWFOCUSLOST:
        # key up events never arrive once the window lost focus
        chip.keypad.release_all()
    return True


# ******************** ENTRY POINT SECTION
def main(argv=None):
    setup_logging()
    args = get_args(argv)
    rom = load_rom(args.file)
    if args.list:
        print("\n".join(listing(rom)))
        return
    # pygame initialization
    pygame.init()
    clock = pygame.time.Clock()
    pygame.display.set_caption(os.path.basename(args.file))
    # IO
    s = Screen(s=args.scale)
    # CPU
    chip = Chip8()
    chip.load_program(rom)
    # emulation loop, one frame per timer tick
    run = True
    try:
        while run:
            clock.tick(TIMER_FREQUENCY)
            # process user input
            # loop throught the event queue
            for event in pygame.event.get():
                run = handle_event(chip, event) and run
            try:
                chip.run(args.ipf)
            except Chip8Error:
                sys.exit(f"********** THE EMULATOR CRASHED WITH THE FOLLOWING STATE\n{chip}")
            chip.tick_timers()
            # only repaint frames where the program touched the display
            if chip.draw:
                s.render(chip.read_display("bytes"))
    finally:
        pygame.quit()
