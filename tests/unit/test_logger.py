import logging

import pytest

from flowboard.logging.logger import Log


class TestRender:
    def test_message_without_context_is_unchanged(self) -> None:
        assert Log._render("hello", {}) == "hello"

    def test_context_is_appended_as_pairs(self) -> None:
        rendered = Log._render("stored", {"file_id": "abc", "bytes": 12})
        assert rendered == "stored | file_id=abc bytes=12"


class TestLogging:
    def test_info_reaches_flowboard_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="flowboard"):
            Log.info("upload done", rows=3)
        assert "upload done | rows=3" in caplog.text

    def test_exception_includes_traceback(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.ERROR, logger="flowboard"):
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                Log.exception("step crashed")
        assert "step crashed" in caplog.text
        assert "RuntimeError: boom" in caplog.text

    def test_configure_adds_single_handler(self) -> None:
        Log.configure("debug")
        Log.configure("info")
        assert len(logging.getLogger("flowboard").handlers) == 1
        assert logging.getLogger("flowboard").level == logging.INFO
