import json
import logging

from trackcore.logging_config import configure_logging
from trackcore.subject.subject import Subject


def test_json_logging(capsys):
    configure_logging(level="INFO", json_format=True)
    logger = logging.getLogger("test.json")
    logger.info("hello json")

    captured = capsys.readouterr()
    record = json.loads(captured.err.strip())
    assert record["message"] == "hello json"
    assert record["level"] == "INFO"
    assert record["logger"] == "test.json"
    assert "timestamp" in record


def test_plain_logging(capsys):
    configure_logging(level="INFO", json_format=False)
    logger = logging.getLogger("test.plain")
    logger.info("hello plain")

    captured = capsys.readouterr()
    line = captured.err.strip()
    assert "hello plain" in line
    assert "test.plain" in line
    try:
        json.loads(line)
        assert False, "Expected plain text, got JSON"
    except json.JSONDecodeError:
        pass


def test_log_file(tmp_path, capsys):
    log_file = tmp_path / "logs" / "tracker.log"
    configure_logging(level="DEBUG", json_format=True, log_file=str(log_file))
    Subject(geo_location_context=True).get_geo_location_dict()
    for handler in logging.getLogger().handlers:
        handler.flush()

    records = [json.loads(line) for line in log_file.read_text().splitlines()]
    messages = [r["message"] for r in records if r["logger"].startswith("trackcore")]
    assert any(m.startswith("Subject created") for m in messages)
    assert any(m.startswith("Geolocation context skipped") for m in messages)
    capsys.readouterr()


def test_log_level_filtering(capsys):
    configure_logging(level="WARNING", json_format=True)
    logger = logging.getLogger("test.level")
    logger.info("should not appear")
    logger.warning("should appear")

    captured = capsys.readouterr()
    lines = [l for l in captured.err.strip().splitlines() if l]
    assert len(lines) == 1
    record = json.loads(lines[0])
    assert record["message"] == "should appear"
