"""Tests for config defaults, YAML file and env overrides."""
import pytest

from minyan import config as cfgmod


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env in cfgmod.ENV_OVERRIDES:
        monkeypatch.delenv(env, raising=False)


def test_defaults(tmp_path):
    cfg = cfgmod.load(home=tmp_path)
    assert cfg["timezone"] == "America/New_York"
    assert cfg["yomtov"] == {"window_days": 10, "wide_window_days": 30}
    assert cfg["events_file"] is None


def test_yaml_file_merges(tmp_path):
    (tmp_path / ".minyan.yml").write_text(
        "timezone: Asia/Jerusalem\nevents_file: /tmp/e.yml\nyomtov:\n  window_days: 5\n"
    )
    cfg = cfgmod.load(home=tmp_path)
    assert cfg["timezone"] == "Asia/Jerusalem"
    assert cfg["events_file"] == "/tmp/e.yml"
    assert cfg["yomtov"] == {"window_days": 5, "wide_window_days": 30}


def test_yaml_alternate_extension(tmp_path):
    (tmp_path / ".minyan.yaml").write_text("calendar_id: main\n")
    assert cfgmod.load(home=tmp_path)["calendar_id"] == "main"


def test_env_beats_file(tmp_path, monkeypatch):
    (tmp_path / ".minyan.yml").write_text("timezone: Asia/Jerusalem\n")
    monkeypatch.setenv("MINYAN_TZ", " UTC ")
    monkeypatch.setenv("MINYAN_EVENTS", "/data/events.yml")
    cfg = cfgmod.load(home=tmp_path)
    assert cfg["timezone"] == "UTC"
    assert cfg["events_file"] == "/data/events.yml"


@pytest.mark.parametrize("text", ["timezone: [unclosed\n", "- a list\n"])
def test_bad_file_falls_back_to_defaults(tmp_path, text):
    (tmp_path / ".minyan.yml").write_text(text)
    assert cfgmod.load(home=tmp_path)["timezone"] == "America/New_York"


def test_defaults_not_shared(tmp_path):
    (tmp_path / ".minyan.yml").write_text("yomtov:\n  window_days: 3\n")
    cfgmod.load(home=tmp_path)
    assert cfgmod.DEFAULTS["yomtov"]["window_days"] == 10


def test_window_and_grace_settings(tmp_path):
    (tmp_path / ".minyan.yml").write_text("upcoming_hours: 48\nelapsed_grace_minutes: 0\n")
    cfg = cfgmod.load(home=tmp_path)
    assert cfg["upcoming_hours"] == 48
    assert cfg["elapsed_grace_minutes"] == 0
