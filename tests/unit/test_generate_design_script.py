"""
Unit tests for the command-line runner helpers
"""
import base64

import pytest

from eventvision.scripts.generate_design import (
    load_media,
    load_reviewed_blueprint,
    parse_args,
    slugify,
    view_extension,
    write_view,
)
from eventvision.services.image_cleanup_service import ImageCleanupService
from eventvision.services.fallback_renderer import fallback_view
from eventvision.services.view_prompts import MAIN_EVENT_SPACE


class TestOutputFiles:
    @pytest.mark.unit
    def test_slugify(self):
        assert slugify("Main Event Space") == "main_event_space"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "data_url, extension",
        [
            ("data:image/svg+xml;base64,AAAA", ".svg"),
            ("data:image/png;base64,AAAA", ".png"),
            ("AAAA", ".png"),
        ],
    )
    def test_view_extension(self, data_url, extension):
        assert view_extension(data_url) == extension

    @pytest.mark.unit
    def test_write_placeholder_view(self, tmp_path):
        path = write_view(fallback_view(MAIN_EVENT_SPACE), str(tmp_path))

        assert path.endswith("main_event_space.svg")
        with open(path, "rb") as f:
            assert f.read().startswith(b"<svg")


class TestLoadMedia:
    @pytest.mark.unit
    def test_skips_non_media_files(self, tmp_path, jpeg_bytes):
        photo = tmp_path / "hall.jpg"
        photo.write_bytes(jpeg_bytes)
        notes = tmp_path / "notes.txt"
        notes.write_bytes(b"bring chairs")

        assets = load_media([str(photo), str(notes)])

        assert [a.name for a in assets] == ["hall.jpg"]
        assert base64.b64decode(assets[0].payload.split(",", 1)[1]) == jpeg_bytes


class TestReviewedBlueprint:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reviewed_blueprint_uses_cleaned_references(self, tmp_path, mock_ai_service, jpeg_asset):
        blueprint_file = tmp_path / "blueprint.txt"
        blueprint_file.write_text("Edited: stage on the east wall", encoding="utf-8")

        blueprint = await load_reviewed_blueprint(
            str(blueprint_file), [jpeg_asset], cleanup_service=ImageCleanupService(mock_ai_service)
        )

        assert blueprint.text == "Edited: stage on the east wall"
        assert blueprint.original_assets == (jpeg_asset,)
        assert [a.name for a in blueprint.cleaned_assets] == ["cleaned_hall.jpg"]


class TestArguments:
    @pytest.mark.unit
    def test_blueprint_only_with_blueprint_file_is_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["hall.jpg", "--blueprint-only", "--blueprint-file", "blueprint.txt"])

    @pytest.mark.unit
    def test_prompt_required_without_blueprint_file(self):
        with pytest.raises(SystemExit):
            parse_args(["hall.jpg"])

    @pytest.mark.unit
    def test_coordinates(self):
        args = parse_args(["hall.jpg", "--prompt", "Gala", "--lat", "40.7", "--lon", "-74.0"])

        assert (args.lat, args.lon) == (40.7, -74.0)
