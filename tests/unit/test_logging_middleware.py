"""
Unit tests for request logging helpers
"""
import pytest

from eventvision.middleware.logging_middleware import (
    extract_session_id,
    get_logger,
    request_id_var,
    session_id_var,
)


class TestSessionIdExtraction:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/api/design/sessions/abc-123/blueprint", "abc-123"),
            ("/api/design/sessions/abc-123", "abc-123"),
            ("/api/design/health", ""),
        ],
    )
    def test_extract_session_id(self, path, expected):
        assert extract_session_id(path) == expected


class TestContextualLogger:
    @pytest.mark.unit
    def test_prefixes_request_and_session(self):
        request_token = request_id_var.set("req12345")
        session_token = session_id_var.set("0123456789abcdef")
        try:
            assert get_logger("test")._format_msg("hello") == "[req12345][sess:01234567] hello"
        finally:
            request_id_var.reset(request_token)
            session_id_var.reset(session_token)

    @pytest.mark.unit
    def test_no_context_no_prefix(self):
        assert get_logger("test")._format_msg("hello") == "hello"
