# tests/conftest.py
from __future__ import annotations

import pytest
from loguru import logger

from shutility.config import AppConfig, configure
from shutility.config.app_config import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """
    每个测试使用默认配置（UTC / bytes 排序），并屏蔽日志输出
    """
    for key in ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)

    configure(AppConfig())
    yield
    configure(None)


@pytest.fixture(autouse=True)
def disable_file_logger(default_config):
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def use_config():
    """
    use_config(date={"timezone": "Europe/London"})
    """
    def _apply(**sections) -> AppConfig:
        cfg = AppConfig(**sections)
        configure(cfg)
        logger.remove()
        logger.add(lambda msg: None)
        return cfg

    return _apply
