import os
import tempfile
import unittest

import pygame

from chip8.cpu import Chip8
from chip8.frontend import get_args, handle_event, listing, load_rom


class TestRom(unittest.TestCase):
    def test_load_rom(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "test.ch8")
            with open(path, "wb") as f:
                f.write(b"\x00\xE0\x12\x00")
            self.assertEqual(load_rom(path), b"\x00\xE0\x12\x00")

    def test_listing(self):
        self.assertEqual(listing(b"\x00\xE0\x12\x34\xF1"),
                         ["0200: 00E0  CLS", "0202: 1234  JP 0x234", "0204: F100  ??? 0xf100"])


class TestArgs(unittest.TestCase):
    def test_defaults(self):
        args = get_args(["-f", "pong.ch8"])
        self.assertEqual(args.file, "pong.ch8")
        self.assertEqual(args.ipf, 8)
        self.assertFalse(args.list)


class TestEvents(unittest.TestCase):
    def test_keys(self):
        chip = Chip8()
        self.assertTrue(handle_event(chip, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)))
        self.assertTrue(chip.keypad.is_pressed(0xA))
        handle_event(chip, pygame.event.Event(pygame.KEYUP, key=pygame.K_a))
        self.assertFalse(chip.keypad.is_pressed(0xA))

    def test_focus_lost_releases_keys(self):
        chip = Chip8()
        chip.set_key_state(0x3, True)
        self.assertTrue(handle_event(chip, pygame.event.Event(pygame.WINDOWFOCUSLOST)))
        self.assertIsNone(chip.keypad.first_pressed())

    def test_quit(self):
        chip = Chip8()
        self.assertFalse(handle_event(chip, pygame.event.Event(pygame.QUIT)))
        self.assertFalse(handle_event(chip, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)))


if __name__ == "__main__":
    unittest.main()
