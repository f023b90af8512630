# openrouter_flow/device/host.py

import time
from typing import Any, Dict, List, Optional, Union

from ..catalog.cache import ModelCache
from ..catalog.matcher import match_models
from ..llm.client import OpenRouterClient
from ..llm.models import DEFAULT_MODEL
from ..utils.logger import get_logger
from .generation import GenerationService
from .interfaces import DeviceSettings, StatusSink
from .monitor import PROBE_INTERVAL, StatusMonitor

logger = get_logger(__name__)

FLOW_ACTIONS = ("generate_text", "generate_with_context")

API_KEY_PREFIX = "sk-or-"


class PairingError(ValueError):
    """Raised when the pairing handshake rejects the submitted credentials."""


class OpenRouterDevice:
    """A paired OpenRouter account: generation plus status probes."""

    def __init__(
            self,
            client: OpenRouterClient,
            settings: DeviceSettings,
            sink: StatusSink,
            interval: float = PROBE_INTERVAL,
    ):
        self.settings = settings
        self.sink = sink
        self.generation = GenerationService(client, settings)
        self.monitor = StatusMonitor(client, settings, sink, interval=interval)

    async def on_init(self):
        logger.info("OpenRouter device initialized")
        await self.monitor.refresh()
        self.monitor.start()

    async def on_settings(self, new_settings: Dict[str, Any]):
        self.settings.apply(new_settings)
        await self.monitor.refresh()

    async def on_deleted(self):
        await self.monitor.stop()

    async def generate_text(
            self,
            prompt: str,
            model: Optional[str] = None,
            system_prompt: Optional[str] = None,
    ) -> str:
        return await self.generation.generate_text(prompt, model, system_prompt)


def _model_id(model: Union[str, Dict[str, Any], None]) -> Optional[str]:
    """Flow cards pass the autocomplete item; accept a bare id as well."""
    if isinstance(model, dict):
        return model.get("id")
    return model


class OpenRouterDriver:
    """
    Flow-card entry points shared by all devices.

    Holds the single model cache used by every autocomplete request.
    """

    def __init__(self, client: OpenRouterClient, cache: Optional[ModelCache] = None):
        self.client = client
        self.cache = cache or ModelCache(client)

    async def autocomplete_models(self, query: str, device: OpenRouterDevice) -> List[Dict[str, str]]:
        models = await self.cache.get_models(device.settings.api_key)
        return [item.to_dict() for item in match_models(query, models, self.cache.featured)]

    async def run_generate_text(self, args: Dict[str, Any]) -> Dict[str, str]:
        device: OpenRouterDevice = args["device"]
        response = await device.generate_text(args["prompt"], _model_id(args.get("model")))
        return {"response": response}

    async def run_generate_with_context(self, args: Dict[str, Any]) -> Dict[str, str]:
        device: OpenRouterDevice = args["device"]
        response = await device.generate_text(
            args["prompt"],
            _model_id(args.get("model")),
            args.get("system_prompt"),
        )
        return {"response": response}

    async def run_action(self, card: str, args: Dict[str, Any]) -> Dict[str, str]:
        """Dispatch a flow action card by its id."""
        if card == "generate_text":
            return await self.run_generate_text(args)
        if card == "generate_with_context":
            return await self.run_generate_with_context(args)
        raise ValueError(f"Unknown flow action '{card}'. Supported actions: {list(FLOW_ACTIONS)}")

    def pair(self) -> "PairSession":
        return PairSession(self.client)


class PairSession:
    """
    Two-step pairing: ``login`` validates the credentials, ``list_devices``
    returns the one device to register with those settings.
    """

    def __init__(self, client: OpenRouterClient):
        self.client = client
        self.settings = DeviceSettings()

    async def login(self, username: Optional[str], password: Optional[str] = None) -> bool:
        # username carries the API key, password the optional default model
        api_key = (username or "").strip()
        default_model = (password or "").strip() or DEFAULT_MODEL

        if not api_key or not api_key.startswith(API_KEY_PREFIX):
            raise PairingError(f"Invalid API key. It should start with {API_KEY_PREFIX}")

        if not await self.client.validate_api_key(api_key):
            raise PairingError("API key validation failed. Please check your key.")

        self.settings = DeviceSettings(api_key=api_key, default_model=default_model)
        return True

    def list_devices(self) -> List[Dict[str, Any]]:
        return [
            {
                "name": "OpenRouter",
                "data": {
                    "id": f"openrouter-{int(time.time() * 1000)}",
                },
                "settings": self.settings.to_dict(),
            }
        ]
