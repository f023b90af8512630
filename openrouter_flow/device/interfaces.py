# openrouter_flow/device/interfaces.py

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..llm.models import DEFAULT_MODEL


class CredentialSource(ABC):
    """Supplies the API key and default model for a device."""

    @property
    @abstractmethod
    def api_key(self) -> str:
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        pass


class StatusSink(ABC):
    """Receives the values published by the status probes."""

    @abstractmethod
    def set_online(self, online: bool) -> None:
        pass

    @abstractmethod
    def set_credits(self, remaining: float) -> None:
        pass


@dataclass
class StatusSnapshot:
    online: bool = False
    credits_remaining: Optional[float] = None
    credits_updated_at: Optional[float] = None


class DeviceSettings(CredentialSource):
    """In-memory settings for one paired device."""

    def __init__(self, api_key: str = "", default_model: str = DEFAULT_MODEL):
        self._api_key = api_key or ""
        self._default_model = default_model or DEFAULT_MODEL

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def default_model(self) -> str:
        return self._default_model

    def apply(self, new_settings: Dict[str, Any]) -> None:
        """Apply a settings change; empty values keep the current setting."""
        if new_settings.get("apiKey"):
            self._api_key = str(new_settings["apiKey"])
        if new_settings.get("defaultModel"):
            self._default_model = str(new_settings["defaultModel"])

    def to_dict(self) -> Dict[str, str]:
        return {"apiKey": self._api_key, "defaultModel": self._default_model}


class CapabilityStore(StatusSink):
    """Holds the last published capability values."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._snapshot = StatusSnapshot()

    def set_online(self, online: bool) -> None:
        self._snapshot = StatusSnapshot(
            online=bool(online),
            credits_remaining=self._snapshot.credits_remaining,
            credits_updated_at=self._snapshot.credits_updated_at,
        )

    def set_credits(self, remaining: float) -> None:
        self._snapshot = StatusSnapshot(
            online=self._snapshot.online,
            credits_remaining=remaining,
            credits_updated_at=self._clock(),
        )

    @property
    def snapshot(self) -> StatusSnapshot:
        return self._snapshot
