import pytest
from pydantic import ValidationError

from dagette import Settings, configure, get_settings, load_settings_from_yaml


def test_defaults():
    s = get_settings()
    assert s.capture_exceptions is True
    assert s.log_level == "warning"
    assert s.emit_events is True


def test_configure_replaces_fields():
    s = configure(capture_exceptions=False, log_level="DEBUG")
    assert s is get_settings()
    assert s.capture_exceptions is False
    assert s.log_level == "debug"
    assert s.emit_events is True


def test_configure_rejects_unknown_and_invalid():
    with pytest.raises(ValidationError):
        configure(unknown=True)
    with pytest.raises(ValidationError):
        configure(log_level="loud")
    assert get_settings() == Settings()


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        get_settings().log_level = "info"  # type: ignore[misc]


def test_load_from_yaml(tmp_path):
    cfg = tmp_path / "dagette.yml"
    cfg.write_text("capture_exceptions: false\nlog_level: info\n")
    s = load_settings_from_yaml(cfg)
    assert s.capture_exceptions is False
    assert s.log_level == "info"


def test_load_from_empty_yaml_keeps_defaults(tmp_path):
    cfg = tmp_path / "empty.yml"
    cfg.write_text("")
    assert load_settings_from_yaml(cfg) == Settings()


def test_load_from_yaml_rejects_non_mapping(tmp_path):
    cfg = tmp_path / "list.yml"
    cfg.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="mapping"):
        load_settings_from_yaml(cfg)


def test_max_worker_threads_validated():
    assert get_settings().max_worker_threads is None
    assert configure(max_worker_threads=8).max_worker_threads == 8
    with pytest.raises(ValidationError):
        configure(max_worker_threads=0)
