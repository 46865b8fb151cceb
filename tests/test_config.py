import logging

import pytest

from config import CONFIG_ENV_VAR, AppConfig, load_config
from logging_utils import setup_logging


def test_missing_file_gives_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yaml")
    assert config == AppConfig()
    assert config.default_algorithm == "RLE"
    assert config.upload_types == ["pdf", "txt"]


def test_values_are_read_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "default_algorithm: LZW\n"
        "upload_types: [.PDF, txt, md]\n"
        "preview_chars: 80\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.default_algorithm == "LZW"
    assert config.upload_types == ["pdf", "txt", "md"]
    assert config.preview_chars == 80
    assert config.log_level == "DEBUG"
    assert config.output_dir == AppConfig().output_dir


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_unknown_algorithm_is_rejected(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("default_algorithm: Brotli\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_env_var_overrides_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("default_algorithm: Huffman\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().default_algorithm == "Huffman"


def test_bundled_config_loads(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    config = load_config()
    assert config.default_algorithm in ("RLE", "Huffman", "LZW")


def test_setup_logging_returns_named_logger(tmp_path):
    logger = setup_logging("textcomp.test", str(tmp_path / "logs"), logging.DEBUG)
    assert logger.name == "textcomp.test"
    assert logging.getLogger().handlers
