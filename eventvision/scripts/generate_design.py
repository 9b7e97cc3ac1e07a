#!/usr/bin/env python3
"""
Generate an event design from the command line.

Usage:
    # Blueprint and all three views
    python -m eventvision.scripts.generate_design hall1.jpg hall2.jpg --prompt "Gala dinner for 200"

    # Review step: write blueprint.txt only, edit it, then render from it
    python -m eventvision.scripts.generate_design hall1.jpg --prompt "Gala dinner" --blueprint-only
    python -m eventvision.scripts.generate_design hall1.jpg --blueprint-file output/blueprint.txt

    Rendering from --blueprint-file cleans the given images again, so pass the same
    files that produced the blueprint.

    # With venue context
    python -m eventvision.scripts.generate_design hall1.jpg --prompt "Wedding" --lat 40.7 --lon -74.0 \
        --website https://venue.example.com

Outputs are saved to --output-dir (default: ./event_design/)
"""

import argparse
import asyncio
import base64
import mimetypes
import os
import re
import sys

from dotenv import load_dotenv

load_dotenv()

from eventvision.core.errors import GenerationError, MediaCodecError  # noqa: E402
from eventvision.services.design_models import Address, Blueprint, Coordinates, RenderedView  # noqa: E402
from eventvision.services.event_design_pipeline import event_design_pipeline  # noqa: E402
from eventvision.services.image_cleanup_service import ImageCleanupService, image_cleanup_service  # noqa: E402
from eventvision.services.media_codec import encode, strip_data_url  # noqa: E402

BLUEPRINT_FILENAME = "blueprint.txt"


def slugify(label: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def view_extension(image_data: str) -> str:
    """File extension for a data URL, e.g. ``.png`` or ``.svg``"""
    mime_type = image_data[len("data:") :].split(";", 1)[0] if image_data.startswith("data:") else ""
    if mime_type == "image/svg+xml":
        return ".svg"
    return mimetypes.guess_extension(mime_type) or ".png"


def write_view(view: RenderedView, output_dir: str) -> str:
    path = os.path.join(output_dir, slugify(view.label) + view_extension(view.image_data))
    with open(path, "wb") as f:
        f.write(base64.b64decode(strip_data_url(view.image_data)))
    return path


def load_media(paths):
    assets = []
    for path in paths:
        with open(path, "rb") as f:
            raw = f.read()
        try:
            assets.append(encode(raw, mimetypes.guess_type(path)[0], os.path.basename(path)))
        except MediaCodecError:
            print(f"Skipping {path}: not an image or video")
    return assets


def parse_location(args):
    if args.address:
        return Address(address=args.address)
    if args.lat is not None and args.lon is not None:
        return Coordinates(latitude=args.lat, longitude=args.lon)
    return None


async def load_reviewed_blueprint(
    path, assets, on_progress=None, cleanup_service: ImageCleanupService = None
) -> Blueprint:
    """Blueprint from an edited text file, with the uploads cleaned as in the blueprint run"""
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    cleaned = await (cleanup_service or image_cleanup_service).clean(assets, on_progress)
    return Blueprint(
        text=text,
        original_assets=tuple(assets),
        cleaned_assets=tuple(cleaned),
        analysis_summary=f"Reviewed blueprint from {path}",
    )


async def run(args) -> int:
    os.makedirs(args.output_dir, exist_ok=True)
    assets = load_media(args.media)

    if args.blueprint_file:
        blueprint = await load_reviewed_blueprint(args.blueprint_file, assets, print)
    else:
        blueprint = await event_design_pipeline.build_blueprint(
            assets, args.prompt or "", parse_location(args), args.website, print
        )
        blueprint_path = os.path.join(args.output_dir, BLUEPRINT_FILENAME)
        with open(blueprint_path, "w", encoding="utf-8") as f:
            f.write(blueprint.text)
        print(blueprint.analysis_summary)
        print(f"Blueprint saved to {blueprint_path}")

        if args.blueprint_only:
            return 0

    views = await event_design_pipeline.render(blueprint, print)
    for view in views:
        marker = " (placeholder)" if view.is_fallback else ""
        print(f"  {view.label}{marker}: {write_view(view, args.output_dir)}")
    return 0


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate an event floor plan and renders from venue photos")
    parser.add_argument("media", nargs="+", help="Venue photos or videos")
    parser.add_argument("--prompt", help="Event vision, e.g. 'Garden wedding for 150 guests'")
    parser.add_argument("--address", help="Venue address or place name")
    parser.add_argument("--lat", type=float, help="Venue latitude")
    parser.add_argument("--lon", type=float, help="Venue longitude")
    parser.add_argument("--website", help="Venue website URL")
    parser.add_argument("--blueprint-only", action="store_true", help="Stop after writing the blueprint")
    parser.add_argument("--blueprint-file", help="Render from an edited blueprint text file")
    parser.add_argument("--output-dir", default="event_design", help="Where to write outputs")

    args = parser.parse_args(argv)

    if args.address and (args.lat is not None or args.lon is not None):
        parser.error("use either --address or --lat/--lon, not both")
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be given together")
    if not args.blueprint_file and not args.prompt:
        parser.error("--prompt is required unless --blueprint-file is given")
    if args.blueprint_only and args.blueprint_file:
        parser.error("--blueprint-only and --blueprint-file cannot be combined")
    return args


def main():
    args = parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except GenerationError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
