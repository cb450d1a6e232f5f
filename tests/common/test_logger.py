from types import SimpleNamespace

from loguru import logger

from src.roster_sync.roster_sync.common.logger import setup_logger_from_settings


def test_settings_route_logs_to_file(tmp_path):
    log_file = tmp_path / "logs" / "roster.log"
    settings = SimpleNamespace(LOG_LEVEL="WARNING", LOG_FILE=str(log_file), LOG_ROTATION="1 MB", DEBUG=False)

    setup_logger_from_settings(settings)
    logger.info("below threshold")
    logger.warning("PUSH_FAILED (HTTP 409)")
    logger.remove()

    text = log_file.read_text(encoding="utf-8")
    assert "PUSH_FAILED (HTTP 409)" in text
    assert "below threshold" not in text


def test_settings_without_log_file_only_use_console(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    setup_logger_from_settings(SimpleNamespace(LOG_LEVEL="INFO", LOG_FILE=None))
    logger.info("console only")
    logger.remove()

    assert list(tmp_path.iterdir()) == []
