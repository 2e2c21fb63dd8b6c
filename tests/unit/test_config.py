"""Tests for reporter configuration."""

from testomat_reporter.config import DEFAULT_BASE_URL, ReporterConfig


def test_from_env_reads_api_key_and_defaults() -> None:
    """Reads the API key and keeps the default endpoint and timeout."""
    config = ReporterConfig.from_env({"TESTOMATIO": "tstmt_key"})

    assert config.api_key.get_secret_value() == "tstmt_key"
    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 10.0
    assert config.has_api_key


def test_from_env_without_key() -> None:
    """A missing key yields a config without API key instead of failing."""
    config = ReporterConfig.from_env({})

    assert not config.has_api_key


def test_blank_key_is_not_a_key() -> None:
    """Whitespace-only keys are rejected like empty ones."""
    assert not ReporterConfig.from_env({"TESTOMATIO": "  "}).has_api_key


def test_from_env_base_url_and_overrides() -> None:
    """Honors TESTOMATIO_URL and explicit overrides."""
    config = ReporterConfig.from_env(
        {"TESTOMATIO": "k", "TESTOMATIO_URL": "http://testomat.test/api/reporter"},
        file_extension=".java",
    )

    assert config.base_url == "http://testomat.test/api/reporter"
    assert config.file_extension == ".java"


def test_api_key_is_not_in_repr() -> None:
    """The key is hidden from repr and str."""
    config = ReporterConfig.from_env({"TESTOMATIO": "tstmt_secret"})

    assert "tstmt_secret" not in repr(config)
    assert "tstmt_secret" not in str(config)
