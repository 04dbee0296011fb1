import io

from bowgame.logger import get_logger


def test_logger_info_output():
    buf = io.StringIO()
    logger = get_logger("test")
    logger.stream = buf  # type: ignore
    logger.info("Hello", "World")
    out = buf.getvalue()
    assert "INFO" in out and "test: Hello World" in out


def test_logger_without_stream_is_silent():
    logger = get_logger("quiet")
    logger.stream = None
    logger.error("nothing to see")  # must not raise


def test_logger_drops_messages_below_min_level(monkeypatch):
    import bowgame.logger as logger_module

    monkeypatch.setattr(logger_module, "_MIN_LEVEL", logger_module._LEVELS["INFO"])
    buf = io.StringIO()
    logger = get_logger("upgrades")
    logger.stream = buf  # type: ignore
    logger.debug("hidden")
    logger.warn("shown")
    out = buf.getvalue()
    assert "hidden" not in out
    assert "WARN  upgrades: shown" in out
