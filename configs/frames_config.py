# configs/frames_config.py
from typing import Dict, List, Tuple

Color = Tuple[int, int, int]

# (id, name, (left, top, right, bottom) border px, border colour, decoration)
PHOTO_FRAMES: List[Tuple[str, str, Tuple[int, int, int, int], Color, str]] = [
    ("classic", "Classic", (20, 20, 20, 20), (255, 255, 255), "hairline"),
    ("polaroid", "Polaroid", (20, 20, 20, 80), (255, 255, 255), "date-caption"),
    ("filmstrip", "Filmstrip", (50, 20, 50, 20), (26, 26, 26), "sprockets"),
    ("aesthetic", "Aesthetic", (30, 30, 30, 30), (248, 249, 250), "none"),
    ("vintage", "Vintage", (25, 25, 25, 25), (139, 69, 19), "corner-brackets"),
    ("golden", "Golden", (30, 30, 30, 30), (218, 165, 32), "ornaments"),
    ("scrapbook", "Scrapbook", (25, 25, 25, 25), (250, 240, 230), "tape"),
]

# inner rings drawn just inside the border, outermost first: (width, colour)
FRAME_RINGS: Dict[str, List[Tuple[int, Color]]] = {
    "classic": [(1, (230, 230, 230))],
    "vintage": [(2, (101, 67, 33))],
    "golden": [(3, (255, 215, 0)), (3, (184, 134, 11))],
    "scrapbook": [(4, (212, 175, 55))],
}

FRAME_ACCENT = (202, 138, 4)  # corner brackets
FRAME_ORNAMENT = (255, 215, 0)
FRAME_CAPTION_COLOR = (75, 85, 99)
FRAME_CAPTION_FORMAT = "%m/%d/%Y"
SPROCKET_COUNT = 10
SPROCKET_SIZE = (16, 12)
SPROCKET_FILL = (255, 255, 255)
SPROCKET_OUTLINE = (156, 163, 175)
TAPE_COLORS: List[Color] = [(254, 240, 138), (251, 207, 232), (191, 219, 254), (187, 247, 208)]
TAPE_SIZE = 28

# uploads are scaled to fit this box before editing
UPLOAD_MAX_SIZE = (800, 600)
