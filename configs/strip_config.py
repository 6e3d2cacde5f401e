"""Geometry and captions for the photobooth strip."""
from __future__ import annotations

from configs.env_utils import get_env_str

STRIP_WIDTH = 300
STRIP_MARGIN = 10  # horizontal inset of each photo cell
HEADER_HEIGHT = 40
FOOTER_HEIGHT = 40
PHOTO_SPACING = 10
CELL_ASPECT = (4, 3)  # width : height

PERFORATION_COUNT = 20
PERFORATION_RADIUS = 3
PERFORATION_INSET = 6  # distance of the dot centre from the strip edge

BORDER_WIDTH = 4

BACKGROUND_COLOR = (255, 255, 255)
INK_COLOR = (0, 0, 0)
PLACEHOLDER_FILL = (240, 240, 240)
PLACEHOLDER_OUTLINE = (204, 204, 204)
PLACEHOLDER_TEXT = (102, 102, 102)

STRIP_CAPTION = get_env_str("STRIP_CAPTION", "PHOTO BOOTH")
STRIP_BRAND = get_env_str("STRIP_BRAND", "SERELUNE STUDIO")
DATE_FORMAT = "%d %b %Y"

# text placement inside the header and footer bands
CAPTION_TOP = 8
DATE_TOP = 22
FOOTER_TEXT_HEIGHT = 12  # nominal line height of the default font

__all__ = [
    "STRIP_WIDTH",
    "STRIP_MARGIN",
    "HEADER_HEIGHT",
    "FOOTER_HEIGHT",
    "PHOTO_SPACING",
    "CELL_ASPECT",
    "PERFORATION_COUNT",
    "PERFORATION_RADIUS",
    "PERFORATION_INSET",
    "BORDER_WIDTH",
    "BACKGROUND_COLOR",
    "INK_COLOR",
    "PLACEHOLDER_FILL",
    "PLACEHOLDER_OUTLINE",
    "PLACEHOLDER_TEXT",
    "STRIP_CAPTION",
    "STRIP_BRAND",
    "DATE_FORMAT",
    "CAPTION_TOP",
    "DATE_TOP",
    "FOOTER_TEXT_HEIGHT",
]
