"""Tests for the forecast renderer."""

from unittest.mock import patch

from PIL import Image

from altus.app import build_view
from altus.models import Location, Theme, ViewState
from altus.renderer import PALETTES, WeatherRenderer, run_render_test

LYON = Location("Lyon, Auvergne-Rhône-Alpes, France", 45.74846, 4.84671)


def _colors(img: Image.Image) -> set:
    return {color for _, color in img.getcolors(maxcolors=img.width * img.height)}


class TestWeatherRenderer:
    """Tests for WeatherRenderer."""

    def test_correct_image_dimensions(self, paris, payload):
        """Verify that render() output matches the requested 960x320 pixel dimensions."""
        img = WeatherRenderer(width=960, height=320).render(build_view(ViewState(paris, payload)))
        assert img.size == (960, 320)
        assert img.mode == "RGB"

    def test_custom_dimensions(self, paris, payload):
        """Verify that non-default dimensions (480x160) are respected in the output image."""
        img = WeatherRenderer(width=480, height=160).render(build_view(ViewState(paris, payload)))
        assert img.size == (480, 160)

    def test_no_view_shows_header_only(self):
        """Verify that a frame before the first city load still renders the header."""
        renderer = WeatherRenderer()
        img = renderer.render(None)
        assert img.getpixel((1, 1)) == PALETTES[Theme.LIGHT].accent

    def test_theme_palettes(self, paris, payload):
        """Verify that the background follows the theme passed per frame."""
        renderer = WeatherRenderer()
        view = build_view(ViewState(paris, payload))
        for theme in Theme:
            img = renderer.render(view, theme=theme)
            assert img.getpixel((0, img.height - 1)) == PALETTES[theme].background

    def test_hot_hour_outlined(self, paris, make_payload):
        """Verify that an hour above 10°C outside the alert horizon is outlined in the temperature color."""
        renderer = WeatherRenderer()
        palette = PALETTES[Theme.LIGHT]
        hot = build_view(ViewState(paris, make_payload(temps={6: 15.0}), hourly_window=8))
        cold = build_view(ViewState(paris, make_payload(), hourly_window=8))
        assert palette.temp in _colors(renderer.render(hot))
        assert palette.temp not in _colors(renderer.render(cold))

    def test_all_days_and_windows(self, paris, payload):
        """Verify that every day with every window length renders without error."""
        renderer = WeatherRenderer(width=480, height=160)
        for day in range(7):
            for window in (4, 8, 12):
                view = build_view(ViewState(paris, payload, day_index=day, hourly_window=window))
                assert renderer.render(view).size == (480, 160)

    def test_last_day_short_window(self, paris, make_payload):
        """Verify that a window running past the end of the forecast still renders."""
        payload = make_payload()
        view = build_view(ViewState(paris, payload, day_index=6, hourly_window=12))
        assert WeatherRenderer().render(view).size == (960, 320)

    def test_long_city_name_truncated(self, payload):
        location = Location("Saint-Remy-en-Bouzemont-Saint-Genest-et-Isson, Grand Est, France", 48.6, 4.6)
        img = WeatherRenderer(width=320, height=160).render(build_view(ViewState(location, payload)))
        assert img.size == (320, 160)

    def test_search_overlay_and_error(self, paris, payload):
        """Verify that search box, suggestions and error bar render together."""
        renderer = WeatherRenderer()
        img = renderer.render(
            build_view(ViewState(paris, payload)),
            theme=Theme.DARK,
            is_favorite=True,
            search_text="Ly",
            suggestions=[LYON, paris],
            selected_suggestion=1,
            error='Ville "Atlantide" non trouvée. Vérifiez l\'orthographe.',
        )
        assert PALETTES[Theme.DARK].error in _colors(img)


class TestRunRenderTest:
    """Tests for the offline mock render."""

    def test_writes_png_per_theme(self, tmp_path):
        with patch("altus.renderer._ROOT", tmp_path):
            light = run_render_test()
            dark = run_render_test(theme=Theme.DARK)
        assert light.endswith("test_output_light.png")
        assert dark.endswith("test_output_dark.png")
        with Image.open(dark) as img:
            assert img.size == (960, 320)

    def test_uses_config_size(self, tmp_path, config):
        config.display.width = 480
        config.display.height = 160
        config.display.theme = "dark"
        with patch("altus.renderer._ROOT", tmp_path):
            path = run_render_test(config)
        assert path.endswith("test_output_dark.png")
        with Image.open(path) as img:
            assert img.size == (480, 160)
