import logging

from appdeck.log_setup import configure_logging
from appdeck.settings import get_settings, reset_settings


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("APPDECK_CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.setenv("APPDECK_LOG_LEVEL", "debug")
    monkeypatch.setenv("APPDECK_MDFIND", "/opt/bin/mdfind")
    reset_settings()

    s = get_settings()
    assert s.config_file == tmp_path / "cfg" / "config.json"
    assert s.icons_dir == tmp_path / "cfg" / "icons"
    assert s.log_level == "DEBUG"
    assert s.mdfind == "/opt/bin/mdfind"
    assert get_settings() is s


def test_logging_writes_under_config_dir(tmp_path):
    s = get_settings()
    logger = configure_logging(s, console=False)
    try:
        logging.getLogger("appdeck.catalog_cache").info("hello from test")
        for h in logger.handlers:
            h.flush()
        log_file = s.logs_dir / "appdeck.log"
        assert "hello from test" in log_file.read_text(encoding="utf-8")
    finally:
        for h in list(logger.handlers):
            logger.removeHandler(h)
            h.close()
