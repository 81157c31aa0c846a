#!filepath: shutility/config/app_config.py
import os
from typing import Optional

import yaml
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .log_config import LogConfig
from .array_config import ArrayConfig
from .date_config import DateConfig
from shutility import logs


def package_root() -> str:
    """
    shutility/config/app_config.py → shutility/config → shutility
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


# 环境变量 → (section, key)
ENV_OVERRIDES = {
    "SHUTILITY_LOG_LEVEL": ("log", "level"),
    "SHUTILITY_LOG_DIR": ("log", "dir"),
    "SHUTILITY_TZ": ("date", "timezone"),
    "SHUTILITY_COLLATION": ("array", "collation"),
}


class AppConfig(BaseModel):
    log: LogConfig = Field(default_factory=LogConfig)
    array: ArrayConfig = Field(default_factory=ArrayConfig)
    date: DateConfig = Field(default_factory=DateConfig)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "AppConfig":
        """
        加载 YAML 配置 + .env
        - 默认使用 <package_root>/config/base.yml
        - .env 从当前工作目录读取，环境变量覆盖 YAML
        """
        # 1) 先加载 .env（不覆盖已有环境变量）
        load_dotenv(os.path.join(os.getcwd(), ".env"))

        # 2) 决定配置文件路径
        if path is None:
            path = os.path.join(package_root(), "config", "base.yml")

        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        # 3) 读取 YAML
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        # 4) 环境变量覆盖
        for env_key, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_key)
            if value:
                raw.setdefault(section, {})
                raw[section][key] = value

        logs.debug(f"[AppConfig] loaded {path}")
        return cls(**raw)


_SETTINGS: Optional[AppConfig] = None


def settings() -> AppConfig:
    """
    进程内缓存的配置（首次访问时加载）
    """
    global _SETTINGS
    if _SETTINGS is None:
        configure(AppConfig.load())
    return _SETTINGS


def configure(cfg: Optional[AppConfig]) -> None:
    """
    替换当前配置并重新配置日志；传 None 则下次访问时重新加载
    """
    global _SETTINGS
    _SETTINGS = cfg
    if cfg is not None:
        logs.configure(
            log_dir=cfg.log.dir,
            rotation=cfg.log.rotation,
            retention=cfg.log.retention,
            log_level=cfg.log.level,
        )
