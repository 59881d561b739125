from enum import Enum

from chip8.constants import MAX_SPRITE_HEIGHT, SCREEN_HEIGHT, SCREEN_WIDTH

ON_CHARS = "▓▓"
OFF_CHARS = "▒▒"


class Pixel(Enum):
    OFF = 0
    ON = 1

    def flipped(self):
        return Pixel.OFF if self is Pixel.ON else Pixel.ON


class Sprite:
    """rows of 8 pixels read from consecutive memory bytes, most significant bit on the left"""

    def __init__(self, rows):
        self.rows = rows

    def __len__(self):
        return len(self.rows)

    def __repr__(self):
        return f"Sprite(height={len(self.rows)})"

    @classmethod
    def from_bytes(cls, data):
        rows = []
        for byte in data:
            rows.append([Pixel.ON if byte & (0x80 >> bit) else Pixel.OFF for bit in range(8)])
        return cls(rows)

    @classmethod
    def from_memory(cls, memory, start_addr: int, height: int):
        assert 0 <= height <= MAX_SPRITE_HEIGHT, f"sprite height {height} out of range"
        return cls.from_bytes(memory.read(start_addr + row) for row in range(height))


class Display:
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [[Pixel.OFF] * w for _ in range(h)]

    def __str__(self):
        return self.as_str()

    def clear(self):
        for row in self.buffer:
            row[:] = [Pixel.OFF] * self.w

    def toggle_pixel(self, x, y) -> bool:
        """flip a pixel (coordinates wrap around), return True if it was ON before the flip"""
        x, y = x % self.w, y % self.h
        previous = self.buffer[y][x]
        self.buffer[y][x] = previous.flipped()
        return previous is Pixel.ON

    def draw_sprite(self, x, y, sprite) -> bool:
        """
        XOR a sprite onto the screen with its top left corner at (x, y)
        return True if any pixel got erased, which is what CHIP-8 calls a collision
        """
        collision = False
        for i, row in enumerate(sprite.rows):
            for j, pixel in enumerate(row):
                if pixel is Pixel.ON:
                    collision |= self.toggle_pixel(x + j, y + i)
        return collision

    # ********** READ VIEWS
    def as_grid(self):
        return [list(row) for row in self.buffer]

    def as_bytes(self) -> bytes:
        return bytes(pixel.value for row in self.buffer for pixel in row)

    def as_str(self) -> str:
        return "\n".join(
            "".join(ON_CHARS if pixel is Pixel.ON else OFF_CHARS for pixel in row)
            for row in self.buffer
        )
