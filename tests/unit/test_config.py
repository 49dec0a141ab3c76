import route_crawler.core.config as config_module  # type: ignore[import]

from tests.helpers.crawler_imports import load_configuration

ENV_KEYS = ["HEADLESS", "PACING_DELAY_MS", "NAVIGATION_TIMEOUT_MS", "OUTPUT_DIR", "DEVICE", "REPORT_PATH"]


def _isolate(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *_args, **_kwargs: False)
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_configuration_defaults(monkeypatch, tmp_path):
    _isolate(monkeypatch)
    monkeypatch.chdir(tmp_path)

    config = load_configuration()

    assert config.headless is True
    assert config.pacing_delay_ms == 1024
    assert config.pacing_delay == 1.024
    assert config.navigation_timeout_ms == 30000
    assert config.output_dir == (tmp_path / "screenshots").resolve()
    assert config.report_path == (tmp_path / "crawl_report.json").resolve()
    assert config.device is None
    assert config.skip_auth_routes is True


def test_load_configuration_uses_environment(monkeypatch, tmp_path):
    _isolate(monkeypatch)
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("PACING_DELAY_MS", "250")
    monkeypatch.setenv("NAVIGATION_TIMEOUT_MS", "5000")
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "captures"))
    monkeypatch.setenv("DEVICE", "Pixel 5")

    config = load_configuration()

    assert config.headless is False
    assert config.pacing_delay_ms == 250
    assert config.navigation_timeout_ms == 5000
    assert config.output_dir == (tmp_path / "captures").resolve()
    assert config.device == "Pixel 5"


def test_explicit_arguments_override_environment(monkeypatch, tmp_path):
    _isolate(monkeypatch)
    monkeypatch.setenv("HEADLESS", "false")
    monkeypatch.setenv("PACING_DELAY_MS", "250")

    config = load_configuration(
        headless=True,
        pacing_delay_ms=0,
        report_name=str(tmp_path / "out.json"),
        skip_auth_routes=False,
        max_routes=10,
    )

    assert config.headless is True
    assert config.pacing_delay_ms == 0
    assert config.report_path == (tmp_path / "out.json").resolve()
    assert config.skip_auth_routes is False
    assert config.max_routes == 10
