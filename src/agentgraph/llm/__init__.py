# __init__.py - Model gateway package
from .base import ModelGateway, LLMConfig
from .adapters import OpenAIAdapter
from .scripted import ScriptedGateway, GatewayRequest

__all__ = ["ModelGateway", "LLMConfig", "OpenAIAdapter", "ScriptedGateway", "GatewayRequest"]
