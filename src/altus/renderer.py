"""PIL-based forecast renderer.

Renders a WeatherView as a PIL Image: a header bar with clock and city, the
conditions block for the selected day, the day selector, and the hourly
strip with rain and high-temperature hours highlighted. An optional search
overlay shows the text being typed and the city suggestions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from altus.codes import TEMP_THRESHOLD, round_half_up, weather_label
from altus.models import (
    AlertResult,
    CurrentConditions,
    DailySeries,
    ForecastPayload,
    HourlySeries,
    Location,
    Theme,
    ViewState,
    WeatherView,
)

# Project root (three levels up from this file)
_ROOT = Path(__file__).resolve().parent.parent.parent
_FONTS_DIR = _ROOT / "fonts"

# Base reference height; every size and gap scales by height / BASE_HEIGHT
BASE_HEIGHT = 320

# Width share of the conditions block; day selector and hourly strip
# split the rest vertically.
LEFT_PANEL = 0.36


@dataclass(frozen=True)
class Palette:
    background: tuple[int, int, int]
    text: tuple[int, int, int]
    muted: tuple[int, int, int]
    accent: tuple[int, int, int]
    on_accent: tuple[int, int, int]
    rain: tuple[int, int, int]
    temp: tuple[int, int, int]
    error: tuple[int, int, int]


PALETTES = {
    Theme.LIGHT: Palette(
        background=(245, 247, 250),
        text=(30, 35, 45),
        muted=(120, 125, 135),
        accent=(52, 120, 246),
        on_accent=(255, 255, 255),
        rain=(52, 120, 246),
        temp=(235, 120, 40),
        error=(200, 40, 40),
    ),
    Theme.DARK: Palette(
        background=(18, 20, 26),
        text=(230, 232, 236),
        muted=(140, 145, 155),
        accent=(90, 150, 255),
        on_accent=(18, 20, 26),
        rain=(90, 150, 255),
        temp=(255, 150, 70),
        error=(255, 90, 90),
    ),
}


def _load_font(name: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    try:
        return ImageFont.truetype(str(_FONTS_DIR / name), size)
    except OSError:
        # Falls back to Pillow's built-in font if the .ttf is missing
        return ImageFont.load_default()


def _text_size(draw: ImageDraw.ImageDraw, text: str, font) -> tuple[int, int]:
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


class WeatherRenderer:
    """Renders forecast views as PIL Images.

    All font sizes and spacing scale with the display height, using 320px
    as the base reference. The renderer holds fonts and layout only; the
    theme is passed per frame so toggling it needs no new renderer.
    """

    def __init__(
        self,
        width: int = 960,
        height: int = 320,
        font_bold: str = "JetBrainsMono-Bold.ttf",
        font_regular: str = "JetBrainsMono-Regular.ttf",
    ) -> None:
        """Initialize the forecast renderer.

        Args:
            width: Image width in pixels.
            height: Image height in pixels. Drives font scaling.
            font_bold: Filename of the bold font used for the header, the big
                temperature and active selector labels. Looked up in fonts/.
            font_regular: Filename of the regular font used everywhere else.
        """
        self.width = width
        self.height = height
        self.scale = height / BASE_HEIGHT
        self.pad = max(2, round(10 * self.scale))
        self.header_height = max(12, round(40 * self.scale))

        self.font_header = _load_font(font_bold, max(8, round(20 * self.scale)))
        self.font_big = _load_font(font_bold, max(10, round(64 * self.scale)))
        self.font_main = _load_font(font_regular, max(7, round(16 * self.scale)))
        self.font_bold = _load_font(font_bold, max(7, round(16 * self.scale)))
        self.font_small = _load_font(font_regular, max(6, round(13 * self.scale)))

    def _truncate_text(self, draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> str:
        """Truncate text with ".." if it exceeds max_width pixels."""
        if not text or _text_size(draw, text, font)[0] <= max_width:
            return text
        for end in range(len(text), 0, -1):
            candidate = text[:end] + ".."
            if _text_size(draw, candidate, font)[0] <= max_width:
                return candidate
        return ".."

    def render(
        self,
        view: WeatherView | None,
        theme: Theme = Theme.LIGHT,
        is_favorite: bool = False,
        search_text: str | None = None,
        suggestions: list[Location] | None = None,
        selected_suggestion: int = 0,
        error: str | None = None,
    ) -> Image.Image:
        """Render one frame.

        Args:
            view: Forecast to show, or None before the first city is loaded.
            theme: Light or dark palette.
            is_favorite: Whether the shown city is a favorite (header marker).
            search_text: Text typed in the search box, or None when the
                search box is closed.
            suggestions: City suggestions listed below the search box.
            selected_suggestion: Highlighted suggestion index.
            error: Message shown at the bottom (failed search or fetch).
        """
        palette = PALETTES[Theme(theme)]
        img = Image.new("RGB", (self.width, self.height), palette.background)
        draw = ImageDraw.Draw(img)

        title = view.location.display_name if view is not None else "Altus"
        self._draw_header(draw, palette, title, is_favorite)

        if view is not None:
            split_x = int(self.width * LEFT_PANEL)
            self._draw_conditions(draw, palette, view, split_x)
            body_top = self.header_height + self.pad
            body_h = self.height - body_top - self.pad
            days_h = body_h * 2 // 5
            self._draw_days(draw, palette, view, split_x, body_top, days_h)
            self._draw_hours(
                draw, palette, view, split_x, body_top + days_h + self.pad,
                body_h - days_h - self.pad,
            )

        if error:
            self._draw_error(draw, palette, error)
        if search_text is not None:
            self._draw_search(draw, palette, search_text, suggestions or [], selected_suggestion)
        return img

    def _draw_header(self, draw, palette: Palette, title: str, is_favorite: bool) -> None:
        """Accent bar with the clock on the left, city centered, favorite marker right."""
        draw.rectangle([(0, 0), (self.width, self.header_height)], fill=palette.accent)
        clock = datetime.now().strftime("%H:%M")
        _, clock_h = _text_size(draw, clock, self.font_header)
        y = (self.header_height - clock_h) // 2
        draw.text((self.pad, y), clock, fill=palette.on_accent, font=self.font_header)

        marker = "[*]" if is_favorite else "[ ]"
        marker_w, _ = _text_size(draw, marker, self.font_header)
        draw.text(
            (self.width - self.pad - marker_w, y), marker,
            fill=palette.on_accent, font=self.font_header,
        )

        clock_w, _ = _text_size(draw, clock, self.font_header)
        max_w = self.width - 2 * (self.pad * 2 + max(clock_w, marker_w))
        text = self._truncate_text(draw, title, self.font_header, max_w)
        text_w, _ = _text_size(draw, text, self.font_header)
        draw.text(
            ((self.width - text_w) // 2, y), text,
            fill=palette.on_accent, font=self.font_header,
        )

    def _draw_conditions(self, draw, palette: Palette, view: WeatherView, split_x: int) -> None:
        """Big temperature, condition label, details and the alert summary."""
        snap = view.snapshot
        x = self.pad * 2
        y = self.header_height + self.pad
        max_w = split_x - x - self.pad

        temp_text = f"{round_half_up(snap.temperature)}°C"
        draw.text((x, y), temp_text, fill=palette.text, font=self.font_big)
        y += _text_size(draw, temp_text, self.font_big)[1] + self.pad * 2

        label = self._truncate_text(draw, weather_label(snap.weather_code), self.font_bold, max_w)
        draw.text((x, y), label, fill=palette.text, font=self.font_bold)
        y += _text_size(draw, "Ag", self.font_bold)[1] + self.pad

        # Future days reuse today's wind and humidity; mark them with "~"
        approx = "~" if snap.approximate else ""
        lines = [
            f"Ressenti {round_half_up(snap.feels_like)}°C",
            f"Vent {approx}{round_half_up(snap.wind_speed)} km/h",
            f"Humidité {approx}{round_half_up(snap.humidity_percent)} %",
        ]
        line_h = _text_size(draw, "Ag", self.font_main)[1] + self.pad // 2
        for line in lines:
            draw.text((x, y), line, fill=palette.muted, font=self.font_main)
            y += line_h

        y += self.pad // 2
        for text, color in self._alert_lines(view.alerts, palette):
            text = self._truncate_text(draw, text, self.font_bold, max_w)
            draw.text((x, y), text, fill=color, font=self.font_bold)
            y += line_h

    @staticmethod
    def _alert_lines(alerts: AlertResult, palette: Palette) -> list[tuple[str, tuple[int, int, int]]]:
        lines = []
        if alerts.rain_alert:
            lines.append((f"Pluie dans {alerts.rain_hour_offset} h", palette.rain))
        if alerts.temp_alert:
            lines.append((f"> {TEMP_THRESHOLD}°C ({round_half_up(alerts.high_temp)}°C)", palette.temp))
        return lines

    def _draw_days(self, draw, palette: Palette, view: WeatherView, left: int, top: int, height: int) -> None:
        """Day selector: one cell per forecast day, the selected one filled."""
        if not view.days:
            return
        right = self.width - self.pad
        cell_w = (right - left) // len(view.days)
        for day in view.days:
            x0 = left + day.index * cell_w
            x1 = x0 + cell_w - self.pad // 2
            active = day.index == view.day_index
            if active:
                draw.rectangle([(x0, top), (x1, top + height)], fill=palette.accent)
            else:
                draw.rectangle([(x0, top), (x1, top + height)], outline=palette.muted)
            fg = palette.on_accent if active else palette.text
            texts = [
                (day.label, self.font_bold if active else self.font_main),
                (day.date_label, self.font_small),
                (f"{round_half_up(day.temperature_min)}/{round_half_up(day.temperature_max)}°", self.font_small),
            ]
            y = top + self.pad // 2
            for text, font in texts:
                text = self._truncate_text(draw, text, font, cell_w - self.pad)
                tw, th = _text_size(draw, text, font)
                draw.text((x0 + (cell_w - tw) // 2, y), text, fill=fg, font=font)
                y += th + self.pad // 2

    def _draw_hours(self, draw, palette: Palette, view: WeatherView, left: int, top: int, height: int) -> None:
        """Hourly strip. Rain hours are filled, hot hours are outlined."""
        if not view.hours:
            return
        right = self.width - self.pad
        cell_w = (right - left) // max(len(view.hours), 1)
        border = max(1, round(2 * self.scale))
        for i, slot in enumerate(view.hours):
            x0 = left + i * cell_w
            x1 = x0 + cell_w - self.pad // 2
            fg = palette.text
            if slot.alert_class == "rain":
                draw.rectangle([(x0, top), (x1, top + height)], fill=palette.rain)
                fg = palette.on_accent
            elif slot.alert_class == "temp":
                draw.rectangle([(x0, top), (x1, top + height)], outline=palette.temp, width=border)
            texts = [
                (f"{slot.hour}h", self.font_bold),
                (f"{round_half_up(slot.temperature)}°C", self.font_main),
                (weather_label(slot.weather_code), self.font_small),
            ]
            y = top + self.pad // 2
            for text, font in texts:
                text = self._truncate_text(draw, text, font, cell_w - self.pad)
                tw, th = _text_size(draw, text, font)
                draw.text((x0 + (cell_w - tw) // 2, y), text, fill=fg, font=font)
                y += th + self.pad // 2

    def _draw_error(self, draw, palette: Palette, message: str) -> None:
        text = self._truncate_text(draw, message, self.font_bold, self.width - 2 * self.pad)
        _, th = _text_size(draw, "Ag", self.font_bold)
        draw.rectangle(
            [(0, self.height - th - 2 * self.pad), (self.width, self.height)],
            fill=palette.background,
        )
        draw.text((self.pad, self.height - th - self.pad), text, fill=palette.error, font=self.font_bold)

    def _draw_search(
        self,
        draw,
        palette: Palette,
        text: str,
        suggestions: list[Location],
        selected: int,
    ) -> None:
        """Search box over the header, suggestions listed below it."""
        line_h = _text_size(draw, "Ag", self.font_main)[1] + self.pad
        box_w = self.width - 4 * self.pad
        x0 = 2 * self.pad
        y0 = self.header_height + self.pad
        draw.rectangle(
            [(x0, y0), (x0 + box_w, y0 + line_h + self.pad)],
            fill=palette.background, outline=palette.accent,
        )
        prompt = self._truncate_text(draw, f"Ville : {text}_", self.font_main, box_w - 2 * self.pad)
        draw.text((x0 + self.pad, y0 + self.pad // 2), prompt, fill=palette.text, font=self.font_main)

        y = y0 + line_h + self.pad
        for i, location in enumerate(suggestions):
            active = i == selected
            draw.rectangle(
                [(x0, y), (x0 + box_w, y + line_h)],
                fill=palette.accent if active else palette.background,
                outline=palette.muted,
            )
            label = self._truncate_text(draw, location.display_name, self.font_main, box_w - 2 * self.pad)
            draw.text(
                (x0 + self.pad, y + self.pad // 2), label,
                fill=palette.on_accent if active else palette.text, font=self.font_main,
            )
            y += line_h


def _mock_payload() -> ForecastPayload:
    """A synthetic 7-day forecast: early-morning showers, warm afternoons."""
    times, temps, codes = [], [], []
    for day in range(7):
        for hour in range(24):
            times.append(f"2026-03-{day + 2:02d}T{hour:02d}:00")
            temps.append(6 + day + 8 * max(0, 1 - abs(hour - 14) / 8))
            codes.append(61 if 2 <= hour <= 3 else (2 if hour < 18 else 3))
    return ForecastPayload(
        current=CurrentConditions(
            temperature=7.4,
            apparent_temperature=5.1,
            humidity_percent=81,
            wind_speed=14.2,
            weather_code=3,
        ),
        hourly=HourlySeries(
            time=times,
            temperature=temps,
            weather_code=codes,
            precipitation_probability=[None] * len(times),
        ),
        daily=DailySeries(
            time=[f"2026-03-{d + 2:02d}" for d in range(7)],
            weather_code=[61, 3, 2, 1, 0, 80, 95],
            temperature_max=[12.0 + d for d in range(7)],
            temperature_min=[4.0 + d for d in range(7)],
        ),
        timezone="Europe/Paris",
    )


def run_render_test(config=None, theme: Theme | None = None) -> str:
    """Render a mock forecast to assets/test_output_{theme}.png and return the path.

    Needs no network access. Uses config for display size, fonts, hourly
    window and theme if provided.
    """
    from altus.app import build_view

    if config is not None:
        renderer = WeatherRenderer(
            width=config.display.width,
            height=config.display.height,
            font_bold=config.fonts.font_bold,
            font_regular=config.fonts.font_regular,
        )
        hourly_window = config.forecast.hourly_window
        if theme is None and config.display.theme:
            theme = Theme(config.display.theme)
    else:
        renderer = WeatherRenderer()
        hourly_window = 12
    theme = theme or Theme.LIGHT

    state = ViewState(
        location=Location("Paris, Île-de-France, France", 48.85341, 2.3488),
        payload=_mock_payload(),
        day_index=0,
        hourly_window=hourly_window,
    )
    view = build_view(state)
    img = renderer.render(view, theme=theme, is_favorite=True)

    assets_dir = _ROOT / "assets"
    assets_dir.mkdir(exist_ok=True)
    output_path = str(assets_dir / f"test_output_{theme.value}.png")
    img.save(output_path)
    return output_path
