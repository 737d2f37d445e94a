"""64x32 monochrome framebuffer with XOR sprite blitting.

One byte per pixel, values 0 or 1, stored row-major as a (height, width)
numpy array. The only mutations are `clear` and `blit`.

Collision is tested once per sprite row: the destination row is packed into
a byte (most significant bit leftmost) before drawing, and the row collides
when that packed value shares a set bit with the sprite byte. Each pixel
coordinate wraps on its own, so a row running off the right edge continues
on the left of the same line, and rows running off the bottom continue at
the top.
"""

import numpy as np

from .config import SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH


class Framebuffer:

    def __init__(self, width=SCREEN_WIDTH, height=SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width), dtype=np.uint8)

    def clear(self):
        self.pixels[:] = 0

    def packed_row(self, x, y):
        """Pack the 8 pixels starting at (x, y) into a byte, wrapping each pixel."""
        row = self.pixels[y % self.height]
        value = 0
        for bit in range(SPRITE_WIDTH):
            value = (value << 1) | int(row[(x + bit) % self.width])
        return value

    def xor_row(self, x, y, sprite):
        row = self.pixels[y % self.height]
        for bit in range(SPRITE_WIDTH):
            if sprite & (0x80 >> bit):
                row[(x + bit) % self.width] ^= 1

    def blit(self, x, y, sprite_rows):
        """XOR `sprite_rows` onto the screen at (x, y). Returns True on collision."""
        collision = False
        for offset, sprite in enumerate(sprite_rows):
            before = self.packed_row(x, y + offset)
            self.xor_row(x, y + offset, sprite)
            if sprite & before:
                collision = True
        return collision

    def pixel(self, x, y):
        return int(self.pixels[y % self.height, x % self.width])

    def snapshot(self):
        """Copy of the screen, shape (height, width)."""
        return self.pixels.copy()

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.pixels)
