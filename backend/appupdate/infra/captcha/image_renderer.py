"""Render captcha answers as small noisy PNG images with Pillow."""

from __future__ import annotations

import io
import secrets
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFilter, ImageFont


def _rand(lo: int, hi: int) -> int:
    """Inclusive random integer from the OS CSPRNG."""
    return lo + secrets.randbelow(hi - lo + 1)


@dataclass(frozen=True, slots=True)
class PillowCaptchaRenderer:
    """
    Draw each character with a random color and vertical jitter over a light
    background, add interference lines and speckles, then blur slightly.
    """

    width: int = 130
    height: int = 40

    def render(self, text: str) -> bytes:
        image = Image.new("RGB", (self.width, self.height), (_rand(225, 255),) * 3)
        draw = ImageDraw.Draw(image)
        font = ImageFont.load_default()

        slot = self.width // max(len(text), 1)
        for idx, char in enumerate(text):
            x = idx * slot + _rand(4, max(4, slot // 3))
            y = _rand(2, max(2, self.height // 3))
            color = (_rand(0, 120), _rand(0, 120), _rand(0, 120))
            draw.text((x, y), char, fill=color, font=font)

        for _ in range(4):
            start = (_rand(0, self.width), _rand(0, self.height))
            end = (_rand(0, self.width), _rand(0, self.height))
            draw.line([start, end], fill=(_rand(100, 200),) * 3, width=1)

        for _ in range(self.width * self.height // 25):
            draw.point((_rand(0, self.width - 1), _rand(0, self.height - 1)), fill=(_rand(0, 255),) * 3)

        image = image.filter(ImageFilter.SMOOTH)
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()
