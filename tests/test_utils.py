import json
import logging
import logging.handlers

import pytest

from utils import CONFIG_SECTIONS, load_config, setup_logging


def test_load_config_fills_missing_sections(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"particle_field": {"capacity": 10}}))

    config = load_config(str(path))

    assert config["particle_field"] == {"capacity": 10}
    assert all(config[section] == {} for section in CONFIG_SECTIONS if section != "particle_field")


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{oops")

    with pytest.raises(json.JSONDecodeError):
        load_config(str(path))


@pytest.mark.parametrize("payload", [[1, 2], {"run_control": 5}])
def test_load_config_rejects_non_object_sections(tmp_path, payload):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload))

    with pytest.raises(ValueError):
        load_config(str(path))


def test_setup_logging_reads_the_logging_section(tmp_path):
    log_file = tmp_path / "logs" / "run.log"

    used = setup_logging({"level": "debug", "log_file": str(log_file)})

    root = logging.getLogger()
    assert used == str(log_file)
    assert root.level == logging.DEBUG
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert len(root.handlers) == 2
    assert log_file.exists()


def test_setup_logging_overrides_win_over_the_section(tmp_path):
    section_file = tmp_path / "section.log"
    override_file = tmp_path / "cli" / "scaffold.log"

    used = setup_logging(
        {"level": "WARNING", "log_file": str(section_file)},
        log_file=str(override_file), level="debug"
    )

    assert used == str(override_file)
    assert logging.getLogger().level == logging.DEBUG
    assert override_file.exists()
    assert not section_file.exists()


def test_setup_logging_twice_keeps_two_handlers(tmp_path):
    setup_logging(log_file=str(tmp_path / "a.log"))
    setup_logging(log_file=str(tmp_path / "b.log"))

    handlers = logging.getLogger().handlers
    assert len(handlers) == 2
    assert [h.baseFilename for h in handlers if isinstance(h, logging.FileHandler)] == [
        str(tmp_path / "b.log")
    ]
