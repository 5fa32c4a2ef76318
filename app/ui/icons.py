"""
Inline SVG icons for HTML pages.
Returned as Markup so Jinja templates can embed them without re-escaping.
"""
from jinja2 import Environment
from markupsafe import Markup

_env = Environment(autoescape=True, trim_blocks=True, lstrip_blocks=True)

KEY_ICON_PATH = (
    "M15.75 5.25a3 3 0 013 3m3 0a6 6 0 01-7.029 5.912c-.563-.097-1.159.026-1.563.43"
    "L10.5 17.25H8.25v2.25H6v2.25H3.75V19.5h-2.25v-2.25h2.25V15h2.25v-2.25h.75"
    "a6.75 6.75 0 016.75-6.75z"
)

_KEY_ICON = _env.from_string(
    '<svg{% if class_name %} class="{{ class_name }}"{% endif %}'
    ' xmlns="http://www.w3.org/2000/svg" fill="none" viewBox="0 0 24 24"'
    ' stroke="currentColor" stroke-width="1.5" aria-hidden="true">'
    '<path stroke-linecap="round" stroke-linejoin="round" d="{{ path }}"/>'
    "</svg>"
)


def key_icon(class_name: str | None = None) -> Markup:
    """Outline key icon (24x24, stroke follows currentColor)."""
    return Markup(_KEY_ICON.render(class_name=class_name, path=KEY_ICON_PATH))
