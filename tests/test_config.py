from pathlib import Path

from marktree.config import Settings, load_settings


def test_defaults():
    s = Settings.from_env()
    assert s.store_backend == "sqlite"
    assert s.store_key == "tizen1-bookmark"
    assert s.capabilities == []


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("MARKTREE_STORE_BACKEND", "memory")
    monkeypatch.setenv("MARKTREE_CAPABILITIES", " cap.a, ,cap.b ")
    monkeypatch.setenv("MARKTREE_NO_COLOR", "yes")
    s = Settings.from_env()
    assert s.store_backend == "memory"
    assert s.capabilities == ["cap.a", "cap.b"]
    assert s.no_color is True


def test_yaml_file_wins_over_env_and_ignores_unknown_keys(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("MARKTREE_STORE_KEY", "from-env")
    cfg = tmp_path / "marktree.yaml"
    cfg.write_text("store_key: from-file\nlog_level: DEBUG\nbogus: 1\n", encoding="utf-8")
    s = load_settings(str(cfg))
    assert s.store_key == "from-file"
    assert s.log_level == "DEBUG"
    assert not hasattr(s, "bogus")


def test_load_settings_without_file_uses_env(monkeypatch):
    monkeypatch.setenv("MARKTREE_LOG_LEVEL", "WARNING")
    assert load_settings(None).log_level == "WARNING"
