"""Pygame display window for the forecast view."""

from __future__ import annotations

import logging
from pathlib import Path

import pygame
from PIL import Image, ImageDraw, ImageFont

from altus.models import Theme
from altus.renderer import PALETTES

logger = logging.getLogger(__name__)

# Project root directory (three levels up: display.py -> altus -> src -> root)
_ROOT = Path(__file__).resolve().parent.parent.parent
# Font directory at project root, shared with the renderer
_FONTS_DIR = _ROOT / "fonts"


class WeatherDisplay:
    """Manages the Pygame window showing rendered forecast frames."""

    def __init__(self, width: int = 960, height: int = 320, fullscreen: bool = False) -> None:
        """Initialize the Pygame display window.

        Args:
            width: Window width in pixels. Matches the renderer default.
            height: Window height in pixels. Matches the renderer default.
            fullscreen: If True, open in fullscreen mode instead of a
                windowed display.
        """
        pygame.init()
        flags = 0
        if fullscreen:
            flags |= pygame.FULLSCREEN
        self.screen = pygame.display.set_mode((width, height), flags)
        pygame.display.set_caption("Altus Météo")
        self.width = width
        self.height = height
        mode = "fullscreen" if fullscreen else f"{width}x{height}"
        logger.info("Pygame display initialized (%s)", mode)

    def update(self, pil_image: Image.Image) -> None:
        """Convert a PIL Image to a Pygame surface and display it."""
        raw = pil_image.tobytes()
        surface = pygame.image.fromstring(raw, pil_image.size, pil_image.mode)
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

    def handle_events(self) -> list[tuple[str, str]] | None:
        """Drain Pygame events.

        Returns None if the window was closed, otherwise a list of
        ("key", name) entries for key presses (pygame key names such as
        "1", "h", "tab", "return", "escape") and ("text", chars) entries for
        typed text. Mapping keys to commands is up to the caller.
        """
        events: list[tuple[str, str]] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.info("Received QUIT event")
                return None
            if event.type == pygame.KEYDOWN:
                events.append(("key", pygame.key.name(event.key)))
            elif event.type == pygame.TEXTINPUT:
                events.append(("text", event.text))
        return events

    def close(self) -> None:
        """Shut down the Pygame display."""
        logger.info("Closing Pygame display")
        pygame.quit()


def _load_font(name: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(str(_FONTS_DIR / name), size)
    except OSError:
        # Falls back to Pillow's built-in font if .ttf missing
        return ImageFont.load_default()


def render_error(
    message: str,
    width: int = 960,
    height: int = 320,
    theme: Theme = Theme.LIGHT,
) -> Image.Image:
    """Render a centered error message on the theme background."""
    palette = PALETTES[Theme(theme)]
    img = Image.new("RGB", (width, height), palette.background)
    draw = ImageDraw.Draw(img)
    font = _load_font("JetBrainsMono-Bold.ttf", max(8, int(height * 0.07)))

    bbox = draw.textbbox((0, 0), message, font=font)
    text_w = bbox[2] - bbox[0]
    text_h = bbox[3] - bbox[1]
    draw.text(((width - text_w) // 2, (height - text_h) // 2), message, fill=palette.error, font=font)
    return img


def render_boot_screen(
    status: str,
    width: int = 960,
    height: int = 320,
    theme: Theme = Theme.LIGHT,
) -> Image.Image:
    """Render a splash screen with the app title, loading status, and version."""
    from altus import __version__

    palette = PALETTES[Theme(theme)]
    img = Image.new("RGB", (width, height), palette.accent)
    draw = ImageDraw.Draw(img)

    title_font = _load_font("JetBrainsMono-Bold.ttf", int(height * 0.25))
    status_font = _load_font("JetBrainsMono-Regular.ttf", int(height * 0.08))
    small_font = _load_font("JetBrainsMono-Regular.ttf", int(height * 0.06))

    # Title centered in the upper half
    title = "Altus"
    tb = draw.textbbox((0, 0), title, font=title_font)
    tx = (width - (tb[2] - tb[0])) // 2
    ty = int(height * 0.15)
    draw.text((tx, ty), title, fill=palette.on_accent, font=title_font)

    # Status line centered below the title
    sb = draw.textbbox((0, 0), status, font=status_font)
    sx = (width - (sb[2] - sb[0])) // 2
    sy = ty + (tb[3] - tb[1]) + int(height * 0.1)
    draw.text((sx, sy), status, fill=palette.on_accent, font=status_font)

    # Version in the bottom-right corner
    version_str = f"v{__version__}"
    vb = draw.textbbox((0, 0), version_str, font=small_font)
    margin = int(height * 0.04)
    draw.text(
        (width - (vb[2] - vb[0]) - margin, height - (vb[3] - vb[1]) - margin),
        version_str, fill=palette.on_accent, font=small_font,
    )
    return img
