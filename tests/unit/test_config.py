# =============================================================================
# TELEWIND - Unit Tests: Configuration loading
# =============================================================================

from pathlib import Path

import pytest

from core.sector import Sector
from shared.config import BASE_DIR, ConfigError, MonitorConfig, load_config, parse_sector

ENV_VARS = ("TELEGRAM_BOT_TOKEN", "DATABASE_URL", "TELEWIND_SOURCE_URL", "TELEWIND_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so monkeypatch removes values that load_dotenv adds
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / "missing.env"


def write_config(tmp_path, text):
    path = tmp_path / "telewind.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:

    def test_missing_file_uses_defaults(self, tmp_path, no_env_file):
        config = load_config(tmp_path / "nope.yaml", env_file=no_env_file)

        assert config.sector == Sector.NORTH_180
        assert config.speed_threshold == 5.0
        assert config.candidate_steps == 5
        assert config.poll_interval_seconds == 55
        assert config.telegram_token is None

    def test_yaml_values(self, tmp_path, no_env_file):
        path = write_config(tmp_path, """
source:
  url: http://example.test/wind
  timeout_seconds: 3
poll_interval_seconds: 30
tracker:
  sector: [280, 90]
  speed_threshold: 7.5
  candidate_steps: 0
  cooldown_steps: 3
database_url: /tmp/subs.db
""")

        config = load_config(path, env_file=no_env_file)

        assert config.source_url == "http://example.test/wind"
        assert config.request_timeout == 3.0
        assert config.poll_interval_seconds == 30.0
        assert config.sector == Sector(280, 90)
        assert config.speed_threshold == 7.5
        assert config.candidate_steps == 0
        assert config.cooldown_steps == 3
        assert config.database_url == "/tmp/subs.db"

    def test_environment_overrides_yaml(self, tmp_path, no_env_file, monkeypatch):
        path = write_config(tmp_path, "database_url: from-yaml.db\nlog_level: INFO\n")
        monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123:abc")
        monkeypatch.setenv("DATABASE_URL", "from-env.db")
        monkeypatch.setenv("TELEWIND_LOG_LEVEL", "DEBUG")

        config = load_config(path, env_file=no_env_file)

        assert config.telegram_token == "123:abc"
        assert config.database_url == "from-env.db"
        assert config.log_level == "DEBUG"

    def test_env_file_is_loaded(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("TELEWIND_SOURCE_URL=http://env.test/page\n", encoding="utf-8")

        config = load_config(tmp_path / "nope.yaml", env_file=env_file)

        assert config.source_url == "http://env.test/page"

    def test_relative_database_path_is_under_project_root(self, tmp_path, no_env_file, monkeypatch):
        path = write_config(tmp_path, "database_url: data/subscriptions.db\n")
        monkeypatch.chdir(tmp_path)

        config = load_config(path, env_file=no_env_file)

        assert Path(config.database_url) == BASE_DIR / "data" / "subscriptions.db"

    def test_in_memory_database_kept(self, tmp_path, no_env_file):
        path = write_config(tmp_path, 'database_url: ":memory:"\n')

        assert load_config(path, env_file=no_env_file).database_url == ":memory:"

    def test_negative_steps_rejected(self, tmp_path, no_env_file):
        path = write_config(tmp_path, "tracker:\n  cooldown_steps: -1\n")

        with pytest.raises(ConfigError):
            load_config(path, env_file=no_env_file)

    def test_invalid_yaml(self, tmp_path, no_env_file):
        path = write_config(tmp_path, "tracker: [unclosed\n")

        with pytest.raises(ConfigError):
            load_config(path, env_file=no_env_file)

    def test_non_numeric_threshold(self, tmp_path, no_env_file):
        path = write_config(tmp_path, "tracker:\n  speed_threshold: strong\n")

        with pytest.raises(ConfigError):
            load_config(path, env_file=no_env_file)


class TestParseSector:

    def test_by_name(self):
        assert parse_sector("south_90") == Sector.SOUTH_90

    def test_by_bounds(self):
        assert parse_sector([10, 20]) == Sector(10, 20)

    @pytest.mark.parametrize("value", ["NOWHERE", [1, 2, 3], [0, 400], 42])
    def test_invalid(self, value):
        with pytest.raises(ConfigError):
            parse_sector(value)


def test_validate_poll_interval():
    config = MonitorConfig(poll_interval_seconds=0)

    with pytest.raises(ConfigError):
        config.validate()
