# openrouter_flow/config.py

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .catalog.cache import CACHE_TTL
from .device.interfaces import DeviceSettings
from .device.monitor import PROBE_INTERVAL
from .llm.client import DEFAULT_BASE_URL, DEFAULT_REFERER, DEFAULT_TITLE, OpenRouterClient
from .llm.models import DEFAULT_MODEL


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got '{value}'")


@dataclass
class Settings:
    """Runtime configuration, read from the environment (and .env)."""
    api_key: str = ""
    default_model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    referer: str = DEFAULT_REFERER
    title: str = DEFAULT_TITLE
    timeout: float = 30.0
    probe_interval: float = PROBE_INTERVAL
    cache_ttl: float = CACHE_TTL

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "Settings":
        load_dotenv(env_file)
        return cls(
            api_key=os.getenv("OPENROUTER_API_KEY", ""),
            default_model=os.getenv("OPENROUTER_DEFAULT_MODEL") or DEFAULT_MODEL,
            base_url=os.getenv("OPENROUTER_BASE_URL") or DEFAULT_BASE_URL,
            referer=os.getenv("OPENROUTER_HTTP_REFERER") or DEFAULT_REFERER,
            title=os.getenv("OPENROUTER_APP_TITLE") or DEFAULT_TITLE,
            timeout=_float_env("OPENROUTER_TIMEOUT", 30.0),
            probe_interval=_float_env("OPENROUTER_PROBE_INTERVAL", PROBE_INTERVAL),
            cache_ttl=_float_env("OPENROUTER_CACHE_TTL", CACHE_TTL),
        )

    def device_settings(self) -> DeviceSettings:
        return DeviceSettings(api_key=self.api_key, default_model=self.default_model)

    def client(self) -> OpenRouterClient:
        return OpenRouterClient(
            base_url=self.base_url,
            referer=self.referer,
            title=self.title,
            timeout=self.timeout,
        )
