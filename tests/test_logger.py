import logging

from mvcgem.logger import StructuredLogger, create_logger


def test_logger_sinks_are_created_once_per_name():
    create_logger("cache-test")
    create_logger("cache-test")
    assert len(logging.getLogger("cache-test.console").handlers) == 1


def test_file_sink_writes_json(tmp_path, capsys):
    log_file = tmp_path / "mvcgem.log"
    logger = StructuredLogger(name="file-sink-test", log_file=str(log_file), level="DEBUG")

    logger.info("Instance built", type="pkg.Type")

    content = log_file.read_text(encoding="utf-8")
    assert '"event": "Instance built"' in content
    assert '"type": "pkg.Type"' in content
    assert "Instance built" in capsys.readouterr().err


def test_first_configuration_wins_and_conflicts_are_reported(capsys):
    create_logger("conflict-test", level="DEBUG")
    again = create_logger("conflict-test", level="ERROR")

    assert again.level == "DEBUG"
    assert logging.getLogger("conflict-test.console").level == logging.DEBUG
    assert "keeping first configuration" in capsys.readouterr().err


def test_unspecified_level_reuses_cached_configuration(capsys):
    create_logger("reuse-test", level="WARNING")
    again = create_logger("reuse-test")

    assert again.level == "WARNING"
    assert "keeping first configuration" not in capsys.readouterr().err
