"""Model catalog caching and autocomplete."""
from .cache import ModelCache
from .matcher import match_models

__all__ = ['ModelCache', 'match_models']
