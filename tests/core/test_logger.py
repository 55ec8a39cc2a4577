from pathlib import Path

from loguru import logger

from archive_tracks.core.logger import setup_logger


def test_log_file_receives_messages(tmp_path: Path) -> None:
    log_file = tmp_path / "nested" / "decode.log"

    setup_logger(level="INFO", log_file=log_file)
    logger.info("decoded activities/1.gpx")
    logger.debug("hidden at INFO")
    logger.remove()

    content = log_file.read_text(encoding="utf-8")
    assert "decoded activities/1.gpx" in content
    assert "hidden at INFO" not in content


def test_console_only_creates_no_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    setup_logger(level="DEBUG")
    logger.info("console only")
    logger.remove()

    assert list(tmp_path.iterdir()) == []
