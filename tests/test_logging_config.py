import logging

from designdrop.logging_config import load_logging_config, setup_logging


def test_setup_logging_writes_file(tmp_path, monkeypatch):
    monkeypatch.delenv("DESIGNDROP_CONFIG", raising=False)
    log_file = tmp_path / "logs" / "app.log"

    setup_logging("debug", log_file)
    logging.getLogger("designdrop.test").debug("hello file")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert "[DEBUG] designdrop.test: hello file" in log_file.read_text(encoding="utf-8")
    logging.getLogger().handlers.clear()


def test_yaml_overrides_level(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yml"
    log_file = tmp_path / "from-yaml.log"
    cfg.write_text(
        f"""
logging:
  level: WARNING
  file: "{log_file}"
  format: "%(levelname)s:%(message)s"
""",
        encoding="utf-8",
    )
    monkeypatch.setenv("DESIGNDROP_CONFIG", str(cfg))

    setup_logging("DEBUG", None)
    log = logging.getLogger("designdrop.yaml")
    log.info("skipped")
    log.warning("kept")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "WARNING:kept" in text
    assert "skipped" not in text
    logging.getLogger().handlers.clear()


def test_missing_yaml_is_empty(tmp_path):
    assert load_logging_config(tmp_path / "absent.yml") == {}
