from .base import Provider, HttpProvider
from .openai import OpenAIProvider
from .anthropic import AnthropicProvider
from .registry import ProviderRegistry, build_default_registry

__all__ = [
    "Provider",
    "HttpProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "ProviderRegistry",
    "build_default_registry",
]
