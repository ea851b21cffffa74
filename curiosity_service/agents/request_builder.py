from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

from curiosity_service.models.discovery import DiscoveryRequest, Mode

PROMPTS = Path(__file__).resolve().parents[1] / "prompts"
SYSTEM_INSTRUCTION = (PROMPTS / "antigravity.txt").read_text(encoding="utf-8").strip()

# fixed sampling temperature for every generateContent call
TEMPERATURE = 0.9

MODE_DIRECTIVES: Dict[Mode, str] = {
    Mode.STANDARD: (
        "Mode: Standard. Return 3 Curiosity vectors based on the input "
        "to escape their conceptual boundaries."
    ),
    Mode.STRANGER_DANGER: (
        "Mode: Stranger Danger Mode. All vectors must have Serendipity Score >= 8. "
        "No topic may share any vocabulary with the user's input. Provide the 3 Vectors strictly."
    ),
    Mode.COLLISION: (
        "Mode: Collision Mode. Treat the user's input as two or more unrelated fields. "
        "Find what exists at their intersection and build 3 vectors from that collision point only."
    ),
}

def directive_for(mode: Any) -> str:
    return MODE_DIRECTIVES[Mode.coerce(mode)]

def build_user_turn(raw_input: str, mode: Any = None) -> str:
    return f'Input: "{raw_input}"\n\n' + directive_for(mode)

def build_payload(request: DiscoveryRequest) -> Dict[str, Any]:
    """Body for a ``generateContent`` call: persona, one user turn, generation config."""
    return {
        "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
        "contents": [{"parts": [{"text": build_user_turn(request.raw_input, request.mode)}]}],
        "generationConfig": {
            "temperature": TEMPERATURE,
        },
    }
