"""
The three fixed render views and their instruction templates.

Each template receives the blueprint text through ``{blueprint}``.
"""
from typing import Tuple

from eventvision.services.design_models import ViewSpec

FLOOR_PLAN = "Floor Plan"
MAIN_EVENT_SPACE = "Main Event Space"
SIDE_VIEW = "Side View"

FLOOR_PLAN_TEMPLATE = """TASK: Create a professional 2D FLOOR PLAN of this venue set up for the event.

EVENT BLUEPRINT:
{blueprint}

STRICT RULES:
- Pure TOP-DOWN orthographic view, as if looking straight down from the ceiling
- NO perspective, NO 3D, NO angled walls, NO shadows
- Clean technical drawing style: black lines on white, like a CAD layout handed to vendors
- Draw the venue's real outline, entrances, windows and fixed features from the reference images
- Show every zone from the blueprint (stage, dining, dance floor, bar, lounge, entrance) with simple symbols
- Tables as circles or rectangles with chairs around them, correctly counted
- Label each zone with short clear text and include a scale bar and a north arrow
- Keep proportions consistent with the estimated dimensions in the blueprint"""

MAIN_EVENT_SPACE_TEMPLATE = """TASK: Create a PHOTOREALISTIC WIDE SHOT of the main event space, fully decorated for the event.

EVENT BLUEPRINT:
{blueprint}

STRICT RULES:
- Keep the EXACT original architecture from the reference images: walls, windows, ceiling, floor, columns and fixed features must not change
- Only ADD event elements: tables, chairs, linens, centerpieces, stage, dance floor, bar, lighting and decor from the blueprint
- Time of day: EVENING around 7:00 PM, warm ambient event lighting, candles and string or uplighting where the blueprint calls for it
- Wide-angle lens from the entrance side, eye level, the whole main space in frame
- Photorealistic professional event photography, no people in the foreground, no text or labels in the image"""

SIDE_VIEW_TEMPLATE = """TASK: Create a PHOTOREALISTIC ANGLED SIDE VIEW of the decorated event space.

EVENT BLUEPRINT:
{blueprint}

STRICT RULES:
- Keep the EXACT original architecture from the reference images, viewed from a side angle about 45 degrees off the main axis
- Same EVENING lighting as the main shot, around 7:00 PM, warm and consistent
- Compose with clear depth layering:
  FOREGROUND: close detail of a dressed table, place settings and centerpiece
  MIDGROUND: the guest seating area and main event zones from the blueprint
  BACKGROUND: the stage or focal wall, bar and the venue's real architecture
- Photorealistic professional event photography, no text or labels in the image"""

VIEW_SPECS: Tuple[ViewSpec, ...] = (
    ViewSpec(label=FLOOR_PLAN, prompt_template=FLOOR_PLAN_TEMPLATE),
    ViewSpec(label=MAIN_EVENT_SPACE, prompt_template=MAIN_EVENT_SPACE_TEMPLATE),
    ViewSpec(label=SIDE_VIEW, prompt_template=SIDE_VIEW_TEMPLATE),
)

VIEW_LABELS: Tuple[str, ...] = tuple(spec.label for spec in VIEW_SPECS)


def reference_trailer(image_count: int, pre_cleaned: bool) -> str:
    """Note appended to every view instruction about the attached references"""
    cleaned_note = " They were pre-cleaned to remove UI overlays and artifacts." if pre_cleaned else ""
    return f"\n\nREFERENCE IMAGES: {image_count} venue image(s) attached.{cleaned_note} Use them as the ground truth for the venue."

