"""OpenRouter text generation for home-automation flows."""

__version__ = "0.1.0"
