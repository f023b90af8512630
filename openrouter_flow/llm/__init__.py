"""OpenRouter API client, models and errors."""
from .client import OpenRouterClient
from .errors import OpenRouterError
from .models import FEATURED_MODELS, ChatMessage, Credits, Model

__all__ = ['OpenRouterClient', 'OpenRouterError', 'FEATURED_MODELS', 'ChatMessage', 'Credits', 'Model']
