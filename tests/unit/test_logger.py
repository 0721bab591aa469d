import io

import pytest

from enricher.logging.logger import Log


@pytest.fixture()
def log_stream() -> io.StringIO:
    stream = io.StringIO()
    Log.configure("DEBUG", stream=stream)
    return stream


class TestLog:
    def test_formats_level_and_message(self, log_stream: io.StringIO) -> None:
        Log.info("Batch finished")
        assert "[INFO] Batch finished" in log_stream.getvalue()

    def test_appends_keyword_context(self, log_stream: io.StringIO) -> None:
        Log.warning("Starting batch", items=3, parallelism=2)
        assert log_stream.getvalue().rstrip().endswith("| items=3 parallelism=2")

    def test_no_context_suffix_without_keywords(self, log_stream: io.StringIO) -> None:
        Log.error("boom")
        assert "|" not in log_stream.getvalue()

    def test_respects_level(self) -> None:
        stream = io.StringIO()
        Log.configure("WARNING", stream=stream)
        Log.debug("hidden")
        Log.info("hidden too")
        Log.warning("shown")
        assert stream.getvalue().count("\n") == 1

    def test_reconfigure_replaces_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        Log.configure("INFO", stream=first)
        Log.configure("INFO", stream=second)
        Log.info("only once")
        assert first.getvalue() == ""
        assert second.getvalue().count("only once") == 1
