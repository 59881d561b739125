import unittest

from chip8.keypad import Keypad


class TestKeypad(unittest.TestCase):
    def test_first_pressed(self):
        k = Keypad()
        self.assertIsNone(k.first_pressed())
        k[0xC] = True
        k[0x3] = True
        self.assertEqual(k.first_pressed(), 0x3)
        k.set_key(0x3, False)
        self.assertEqual(k.first_pressed(), 0xC)
        self.assertTrue(k[0xC])

    def test_update_and_release(self):
        k = Keypad()
        k.update([1] + [0] * 15)
        self.assertTrue(k.is_pressed(0))
        k.release_all()
        self.assertIsNone(k.first_pressed())

    def test_bad_input(self):
        k = Keypad()
        with self.assertRaises(ValueError):
            k.set_key(16, True)
        with self.assertRaises(ValueError):
            k.update([True] * 3)


if __name__ == "__main__":
    unittest.main()
