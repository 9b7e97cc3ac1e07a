"""
Deterministic SVG placeholders used when the image model returns nothing usable.

Every generator draws fixed geometry only. The blueprint text is accepted so the
call shape matches the AI path, but it does not change the drawing: the same
label always yields byte-identical output.
"""
import math
from html import escape
from typing import Callable, Dict, List, Tuple

from eventvision.services.design_models import RenderedView
from eventvision.services.media_codec import to_data_url
from eventvision.services.view_prompts import FLOOR_PLAN, MAIN_EVENT_SPACE, SIDE_VIEW, VIEW_SPECS

SVG_MIME_TYPE = "image/svg+xml"
WIDTH = 800
HEIGHT = 600
FONT = "Helvetica, Arial, sans-serif"

FALLBACK_DESCRIPTIONS = {
    FLOOR_PLAN: (
        "Standard floor plan layout: stage at the far wall, central dance floor, bar on the right "
        "and round guest tables on both sides. Shown because the AI floor plan could not be generated."
    ),
    MAIN_EVENT_SPACE: (
        "Schematic evening view of the main event space with stage, string lights and dressed tables. "
        "Shown because the AI render could not be generated."
    ),
    SIDE_VIEW: (
        "Schematic side view with a dressed table in the foreground, guest seating in the midground "
        "and the stage and bar in the background. Shown because the AI render could not be generated."
    ),
}

# Round guest tables on the floor plan: (cx, cy)
FLOOR_PLAN_TABLES: Tuple[Tuple[int, int], ...] = (
    (130, 210), (220, 210), (130, 310), (220, 310), (130, 410), (220, 410),
    (580, 210), (670, 210), (580, 310), (670, 310), (580, 410), (670, 410),
)

# Tables in the main event space, back rows first: (cx, cy, rx, ry)
EVENT_SPACE_TABLES: Tuple[Tuple[int, int, int, int], ...] = (
    (250, 330, 34, 10), (400, 330, 34, 10), (550, 330, 34, 10),
    (190, 390, 46, 14), (400, 390, 46, 14), (610, 390, 46, 14),
    (120, 470, 62, 19), (400, 470, 62, 19), (680, 470, 62, 19),
)

# Warm bulbs along two strands of string lights
STRING_LIGHT_STRANDS: Tuple[Tuple[Tuple[int, int], ...], ...] = (
    ((120, 90), (220, 125), (320, 140), (400, 145), (480, 140), (580, 125), (680, 90)),
    ((160, 60), (260, 92), (360, 104), (440, 104), (540, 92), (640, 60)),
)


def _svg_document(label: str, body: List[str], background: str = "#ffffff") -> str:
    elements = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{WIDTH}" height="{HEIGHT}" viewBox="0 0 {WIDTH} {HEIGHT}">',
        f"<title>{escape(label)}</title>",
        f'<rect x="0" y="0" width="{WIDTH}" height="{HEIGHT}" fill="{background}"/>',
        *body,
        "</svg>",
    ]
    return "\n".join(elements)


def _text(x: int, y: int, content: str, size: int = 14, fill: str = "#1f2937", weight: str = "normal") -> str:
    return (
        f'<text x="{x}" y="{y}" font-family="{FONT}" font-size="{size}" font-weight="{weight}" '
        f'fill="{fill}" text-anchor="middle">{escape(content)}</text>'
    )


def _caption(label: str, fill: str = "#6b7280") -> str:
    return _text(WIDTH // 2, HEIGHT - 12, f"{label} (schematic preview)", size=13, fill=fill)


def _round_table(cx: int, cy: int, radius: int = 24, chairs: int = 8) -> List[str]:
    elements = [f'<circle cx="{cx}" cy="{cy}" r="{radius}" fill="#ffffff" stroke="#1f2937" stroke-width="2"/>']
    for index in range(chairs):
        angle = 2 * math.pi * index / chairs
        chair_x = cx + (radius + 9) * math.cos(angle)
        chair_y = cy + (radius + 9) * math.sin(angle)
        elements.append(f'<circle cx="{chair_x:.1f}" cy="{chair_y:.1f}" r="5" fill="#9ca3af"/>')
    return elements


def floor_plan_svg(blueprint_text: str = "") -> str:
    """Top-down technical layout"""
    body = []

    # Grid
    for x in range(40, 761, 40):
        body.append(f'<line x1="{x}" y1="40" x2="{x}" y2="540" stroke="#e5e7eb" stroke-width="1"/>')
    for y in range(40, 541, 40):
        body.append(f'<line x1="40" y1="{y}" x2="760" y2="{y}" stroke="#e5e7eb" stroke-width="1"/>')

    # Walls with the entrance gap on the south wall
    body.append('<rect x="40" y="40" width="720" height="500" fill="none" stroke="#111827" stroke-width="6"/>')
    body.append('<rect x="360" y="534" width="80" height="12" fill="#ffffff"/>')
    body.append(_text(400, 530, "ENTRANCE", size=12, weight="bold"))

    # Stage
    body.append('<rect x="290" y="60" width="220" height="70" fill="#f3f4f6" stroke="#111827" stroke-width="2"/>')
    body.append(_text(400, 100, "STAGE", weight="bold"))

    # Dance floor
    body.append(
        '<rect x="320" y="180" width="160" height="150" fill="#f9fafb" stroke="#111827" '
        'stroke-width="2" stroke-dasharray="8 4"/>'
    )
    body.append(_text(400, 260, "DANCE FLOOR", weight="bold"))

    # Bar along the east wall
    body.append('<rect x="712" y="440" width="36" height="90" fill="#f3f4f6" stroke="#111827" stroke-width="2"/>')
    body.append(_text(730, 432, "BAR", size=12, weight="bold"))

    # Guest tables
    for cx, cy in FLOOR_PLAN_TABLES:
        body.extend(_round_table(cx, cy))

    # North arrow
    body.append('<polygon points="730,60 740,90 730,84 720,90" fill="#111827"/>')
    body.append(_text(730, 108, "N", size=12, weight="bold"))

    # Scale bar
    body.append('<line x1="60" y1="520" x2="140" y2="520" stroke="#111827" stroke-width="3"/>')
    body.append(_text(100, 512, "10 ft", size=11))

    body.append(_caption(FLOOR_PLAN))
    return _svg_document(FLOOR_PLAN, body)


def main_event_space_svg(blueprint_text: str = "") -> str:
    """Evening wide shot, drawn as a simple one-point perspective"""
    body = [
        "<defs>",
        '<linearGradient id="evening" x1="0" y1="0" x2="0" y2="1">',
        '<stop offset="0" stop-color="#1e1b4b"/>',
        '<stop offset="1" stop-color="#4c1d95"/>',
        "</linearGradient>",
        "</defs>",
        f'<rect x="0" y="0" width="{WIDTH}" height="{HEIGHT}" fill="url(#evening)"/>',
        # Back wall, floor and side walls
        '<rect x="200" y="160" width="400" height="160" fill="#3b3363"/>',
        '<polygon points="200,320 600,320 800,600 0,600" fill="#2a2440"/>',
        '<polygon points="0,0 200,160 200,320 0,600" fill="#2f2850"/>',
        '<polygon points="800,0 600,160 600,320 800,600" fill="#2f2850"/>',
        # Stage at the back wall
        '<rect x="300" y="250" width="200" height="50" fill="#6d28d9" stroke="#c4b5fd" stroke-width="2"/>',
        _text(400, 282, "STAGE", size=14, fill="#ede9fe", weight="bold"),
        # Dance floor glow
        '<ellipse cx="400" cy="360" rx="120" ry="22" fill="#fbbf24" fill-opacity="0.18"/>',
    ]

    for strand in STRING_LIGHT_STRANDS:
        points = " ".join(f"{x},{y}" for x, y in strand)
        body.append(f'<polyline points="{points}" fill="none" stroke="#78716c" stroke-width="1.5"/>')
        for x, y in strand:
            body.append(f'<circle cx="{x}" cy="{y + 6}" r="5" fill="#fde68a"/>')
            body.append(f'<circle cx="{x}" cy="{y + 6}" r="11" fill="#fde68a" fill-opacity="0.2"/>')

    for cx, cy, rx, ry in EVENT_SPACE_TABLES:
        body.append(f'<ellipse cx="{cx}" cy="{cy}" rx="{rx}" ry="{ry}" fill="#f5f5f4" stroke="#d6d3d1" stroke-width="1"/>')
        body.append(f'<circle cx="{cx}" cy="{cy - ry}" r="{max(ry // 2, 4)}" fill="#f472b6"/>')

    body.append(_caption(MAIN_EVENT_SPACE, fill="#ddd6fe"))
    return _svg_document(MAIN_EVENT_SPACE, body, background="#1e1b4b")


def side_view_svg(blueprint_text: str = "") -> str:
    """Angled view with explicit foreground/midground/background layers"""
    body = [
        # Background: focal wall, stage and bar
        '<rect x="0" y="0" width="800" height="300" fill="#312e81"/>',
        '<polygon points="0,300 800,300 800,600 0,600" fill="#1f1b3a"/>',
        '<rect x="460" y="170" width="260" height="80" fill="#5b21b6" stroke="#c4b5fd" stroke-width="2"/>',
        _text(590, 216, "STAGE", size=14, fill="#ede9fe", weight="bold"),
        '<rect x="70" y="200" width="170" height="60" fill="#44403c" stroke="#a8a29e" stroke-width="2"/>',
        _text(155, 236, "BAR", size=13, fill="#f5f5f4", weight="bold"),
        _text(720, 150, "BACKGROUND", size=11, fill="#a5b4fc"),
    ]

    for x in range(40, 800, 80):
        body.append(f'<circle cx="{x}" cy="{60 + (x % 160) // 8}" r="4" fill="#fde68a"/>')

    # Midground: guest seating
    for cx in (180, 340, 500, 660):
        body.append(f'<ellipse cx="{cx}" cy="360" rx="56" ry="16" fill="#e7e5e4" stroke="#a8a29e" stroke-width="1"/>')
        body.append(f'<rect x="{cx - 4}" y="330" width="8" height="22" fill="#f9a8d4"/>')
    body.append(_text(720, 320, "MIDGROUND", size=11, fill="#a5b4fc"))

    # Foreground: one dressed table, close to the camera
    body.append('<ellipse cx="260" cy="530" rx="240" ry="60" fill="#fafaf9" stroke="#d6d3d1" stroke-width="2"/>')
    for cx in (140, 260, 380):
        body.append(f'<ellipse cx="{cx}" cy="540" rx="32" ry="9" fill="#ffffff" stroke="#a8a29e" stroke-width="1"/>')
    body.append('<rect x="250" y="440" width="20" height="70" fill="#a78bfa"/>')
    body.append('<circle cx="260" cy="430" r="30" fill="#f472b6" fill-opacity="0.85"/>')
    body.append(_text(720, 520, "FOREGROUND", size=11, fill="#a5b4fc"))

    body.append(_caption(SIDE_VIEW, fill="#c7d2fe"))
    return _svg_document(SIDE_VIEW, body, background="#312e81")


def generic_card_svg(label: str) -> str:
    body = [
        '<rect x="100" y="150" width="600" height="300" rx="24" fill="#f3f4f6" stroke="#d1d5db" stroke-width="2"/>',
        _text(400, 290, label, size=28, weight="bold"),
        _text(400, 330, "Preview unavailable", size=16, fill="#6b7280"),
    ]
    return _svg_document(label, body)


GENERATORS: Dict[str, Callable[[str], str]] = {
    FLOOR_PLAN: floor_plan_svg,
    MAIN_EVENT_SPACE: main_event_space_svg,
    SIDE_VIEW: side_view_svg,
}


def placeholder_svg(label: str, blueprint_text: str = "") -> str:
    """SVG markup for a view label"""
    generator = GENERATORS.get(label)
    if generator is None:
        return generic_card_svg(label)
    return generator(blueprint_text)


def placeholder_for(label: str, blueprint_text: str = "") -> str:
    """Placeholder image for a view label, as an ``image/svg+xml`` data URL"""
    return to_data_url(placeholder_svg(label, blueprint_text).encode("utf-8"), SVG_MIME_TYPE)


def fallback_description(label: str) -> str:
    return FALLBACK_DESCRIPTIONS.get(label, f"Placeholder for {label}.")


def fallback_view(label: str, blueprint_text: str = "") -> RenderedView:
    return RenderedView(
        image_data=placeholder_for(label, blueprint_text),
        description=fallback_description(label),
        label=label,
        is_fallback=True,
    )


def fallback_views(blueprint_text: str = "") -> List[RenderedView]:
    """A complete result built only from placeholders, in view order"""
    return [fallback_view(spec.label, blueprint_text) for spec in VIEW_SPECS]
