"""Device-side services and the host-facing device/driver objects."""
from .generation import GenerationService
from .host import OpenRouterDevice, OpenRouterDriver, PairSession, PairingError
from .interfaces import CapabilityStore, CredentialSource, DeviceSettings, StatusSink, StatusSnapshot
from .monitor import StatusMonitor

__all__ = [
    'GenerationService', 'OpenRouterDevice', 'OpenRouterDriver', 'PairSession', 'PairingError',
    'CapabilityStore', 'CredentialSource', 'DeviceSettings', 'StatusSink', 'StatusSnapshot',
    'StatusMonitor',
]
