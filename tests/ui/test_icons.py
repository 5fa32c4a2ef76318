"""Tests for inline SVG icons."""
from markupsafe import Markup

from app.ui.icons import KEY_ICON_PATH, key_icon


def test_key_icon_without_class():
    svg = key_icon()
    assert isinstance(svg, Markup)
    assert svg.startswith("<svg ")
    assert "class=" not in svg
    assert 'viewBox="0 0 24 24"' in svg
    assert 'stroke="currentColor"' in svg
    assert 'aria-hidden="true"' in svg
    assert f'd="{KEY_ICON_PATH}"' in svg


def test_key_icon_with_class():
    assert '<svg class="h-6 w-6 text-gray-400" ' in key_icon("h-6 w-6 text-gray-400")


def test_key_icon_escapes_class():
    svg = key_icon('x" onload="alert(1)')
    assert 'onload="alert' not in svg
    assert "&#34;" in svg
