# curiosity_service/llms/registry.py
from typing import Optional

from curiosity_service.config import settings
from .base import LLMProvider
from .gemini_provider import GeminiProvider

def get_provider(name: Optional[str] = None, model_id: Optional[str] = None) -> LLMProvider:
    name = (name or settings.LLM_PROVIDER).lower()
    if name == "gemini":
        return GeminiProvider(model_id=model_id or settings.GEMINI_MODEL_ID)
    raise ValueError(f"Unknown LLM provider: {name}")
