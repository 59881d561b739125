import unittest

from chip8.display import Display, Pixel, Sprite
from chip8.memory import Memory


class TestSprite(unittest.TestCase):
    def test_from_bytes(self):
        sprite = Sprite.from_bytes([0x81])
        self.assertEqual(sprite.rows, [[Pixel.ON] + [Pixel.OFF] * 6 + [Pixel.ON]])

    def test_from_memory(self):
        sprite = Sprite.from_memory(Memory(), 5, 5)     # glyph 1
        self.assertEqual(len(sprite), 5)
        self.assertEqual(sprite.rows[0][:4], [Pixel.OFF, Pixel.OFF, Pixel.ON, Pixel.OFF])

    def test_height_limit(self):
        with self.assertRaises(AssertionError):
            Sprite.from_memory(Memory(), 0, 16)


class TestDisplay(unittest.TestCase):
    def test_toggle(self):
        d = Display()
        self.assertFalse(d.toggle_pixel(3, 4))
        self.assertEqual(d.as_grid()[4][3], Pixel.ON)
        self.assertTrue(d.toggle_pixel(3, 4))
        self.assertEqual(d.as_grid()[4][3], Pixel.OFF)

    def test_toggle_wraps(self):
        d = Display()
        d.toggle_pixel(64 + 2, 32 + 1)
        self.assertEqual(d.as_grid()[1][2], Pixel.ON)

    def test_draw_collision(self):
        d = Display()
        sprite = Sprite.from_bytes([0xC0])
        self.assertFalse(d.draw_sprite(0, 0, sprite))
        self.assertTrue(d.draw_sprite(1, 0, sprite))
        self.assertEqual(d.as_bytes()[:3], bytes([1, 0, 1]))

    def test_clear(self):
        d = Display()
        d.draw_sprite(10, 10, Sprite.from_bytes([0xFF, 0xFF]))
        d.clear()
        self.assertEqual(d.as_bytes(), bytes(64 * 32))

    def test_views_do_not_mutate(self):
        d = Display()
        grid = d.as_grid()
        grid[0][0] = Pixel.ON
        self.assertEqual(d.as_grid()[0][0], Pixel.OFF)

    def test_str(self):
        d = Display(w=2, h=2)
        d.toggle_pixel(1, 0)
        self.assertEqual(d.as_str(), "▒▒▓▓\n▒▒▒▒")


if __name__ == "__main__":
    unittest.main()
