from typing import Any, Dict, Protocol

class LLMProvider(Protocol):
    model_id: str
    async def generate(self, payload: Dict[str, Any], *, api_key: str) -> str: ...
