"""
Tests for the config module.
"""

import pytest

from giter.config import Settings


class TestSettings:
    """Test Settings dataclass."""

    def test_defaults(self):
        settings = Settings()

        assert settings.account == "develop-suda"
        assert settings.api_base == "https://api.github.com"
        assert settings.timeout == 10
        assert settings.max_workers == 1
        assert settings.port == 8080

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            Settings().account = "other"

    def test_rejects_zero_workers(self):
        with pytest.raises(ValueError, match="max_workers"):
            Settings(max_workers=0)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValueError, match="timeout"):
            Settings(timeout=0)


class TestFromEnv:
    """Test Settings.from_env."""

    def test_empty_environment_uses_defaults(self):
        assert Settings.from_env({}) == Settings()

    def test_reads_all_variables(self):
        settings = Settings.from_env(
            {
                "GITHUB_ACCOUNT": "octocat",
                "GITHUB_API_BASE": "https://ghe.example.com/api/v3/",
                "GITHUB_TIMEOUT": "2.5",
                "GITER_MAX_WORKERS": "5",
                "HOST": "127.0.0.1",
                "PORT": "9000",
                "LOG_LEVEL": "debug",
                "LOG_DIR": "/tmp/giter-logs",
            }
        )

        assert settings == Settings(
            account="octocat",
            api_base="https://ghe.example.com/api/v3",
            timeout=2.5,
            max_workers=5,
            host="127.0.0.1",
            port=9000,
            log_level="debug",
            log_dir="/tmp/giter-logs",
        )

    def test_blank_numbers_use_defaults(self):
        settings = Settings.from_env({"PORT": "", "GITHUB_TIMEOUT": "  "})

        assert settings.port == 8080
        assert settings.timeout == 10

    @pytest.mark.parametrize(
        "name,value",
        [("PORT", "eighty"), ("GITER_MAX_WORKERS", "1.5"), ("GITHUB_TIMEOUT", "soon")],
    )
    def test_invalid_numbers_name_the_variable(self, name, value):
        with pytest.raises(ValueError, match=name):
            Settings.from_env({name: value})

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_ACCOUNT", "from-env")

        assert Settings.from_env().account == "from-env"
