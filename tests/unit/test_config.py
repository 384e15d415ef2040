import pytest

from config import DEFAULT_TIMEOUT_S, ReporterConfig, load_config

_ENV_VARS = [
    "REPORTER_PACKAGE_NAME",
    "REPORTER_PACKAGE_VERSION",
    "REPORTER_VERSION_KEY",
    "REPORTER_TIMEOUT_S",
    "REPORTER_LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setattr("config.dotenv.load_dotenv", lambda *a, **kw: False)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_load_config_defaults(clean_env: pytest.MonkeyPatch):
    cfg = load_config().reporter
    assert cfg.package_name == "reporter-proxy"
    assert cfg.package_version is None
    assert cfg.version_key == "package_version"
    assert cfg.timeout_s == DEFAULT_TIMEOUT_S == 300.0
    assert cfg.log_level == "INFO"


def test_load_config_parses_optional_fields(clean_env: pytest.MonkeyPatch):
    clean_env.setenv("REPORTER_PACKAGE_NAME", "my-app")
    clean_env.setenv("REPORTER_PACKAGE_VERSION", "4.5.6")
    clean_env.setenv("REPORTER_VERSION_KEY", "gitHubPackageVersion")
    clean_env.setenv("REPORTER_TIMEOUT_S", "12.5")
    clean_env.setenv("REPORTER_LOG_LEVEL", "debug")

    cfg = load_config().reporter
    assert cfg.package_name == "my-app"
    assert cfg.package_version == "4.5.6"
    assert cfg.version_key == "gitHubPackageVersion"
    assert cfg.timeout_s == 12.5
    assert cfg.log_level == "DEBUG"


def test_load_config_ignores_placeholder_version(clean_env: pytest.MonkeyPatch):
    clean_env.setenv("REPORTER_PACKAGE_VERSION", "your_package_version_here")
    assert load_config().reporter.package_version is None


def test_load_config_rejects_non_numeric_timeout(clean_env: pytest.MonkeyPatch):
    clean_env.setenv("REPORTER_TIMEOUT_S", "soon")
    with pytest.raises(ValueError, match="REPORTER_TIMEOUT_S"):
        load_config()


@pytest.mark.parametrize("timeout_s", [0, -1.0])
def test_reporter_config_timeout_must_be_positive(timeout_s: float):
    with pytest.raises(ValueError):
        ReporterConfig(timeout_s=timeout_s)


def test_reporter_config_rejects_unknown_log_level():
    with pytest.raises(ValueError):
        ReporterConfig(log_level="chatty")


def test_reporter_config_rejects_blank_version_key():
    with pytest.raises(ValueError):
        ReporterConfig(version_key="  ")
