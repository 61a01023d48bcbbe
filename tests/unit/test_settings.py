from src.config.settings import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()

    assert settings.recent_match_limit == 20
    assert settings.consistency_min_sample == 3
    assert settings.consistency_max_results == 10
    assert settings.consistency_display_limit == 5
    assert settings.build_cluster_gap_minutes == 1
    assert settings.assistant_recent_matches == 20
    assert settings.is_development
    assert not settings.is_production


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("CONSISTENCY_MIN_SAMPLE", "5")
    monkeypatch.setenv("app_env", "production")

    settings = Settings()

    assert settings.consistency_min_sample == 5
    assert settings.is_production


def test_dotenv_file_is_read(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("RECENT_MATCH_LIMIT=7\n")

    assert Settings().recent_match_limit == 7


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
