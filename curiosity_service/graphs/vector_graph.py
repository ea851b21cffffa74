# curiosity_service/graphs/vector_graph.py
from __future__ import annotations

import logging
import time
from typing import Any, List, Optional

from langgraph.graph import StateGraph, END

from curiosity_service.agents.request_builder import build_payload
from curiosity_service.agents.vector_parser import parse_vectors
from curiosity_service.llms.base import LLMProvider
from curiosity_service.llms.registry import get_provider
from curiosity_service.models.discovery import DiscoveryRecord, DiscoveryRequest
from curiosity_service.models.state import VectorState

logger = logging.getLogger(__name__)


def build_graph(provider: LLMProvider):
    async def build_node(state: VectorState) -> VectorState:
        state["payload"] = build_payload(state["request"])
        return state

    async def generate_node(state: VectorState) -> VectorState:
        state["reply_text"] = await provider.generate(state["payload"], api_key=state["api_key"])
        return state

    async def parse_node(state: VectorState) -> VectorState:
        state["vectors"] = parse_vectors(state["reply_text"])
        return state

    sg = StateGraph(VectorState)
    sg.add_node("build", build_node)
    sg.add_node("generate", generate_node)
    sg.add_node("parse", parse_node)

    sg.set_entry_point("build")
    sg.add_edge("build", "generate")
    sg.add_edge("generate", "parse")
    sg.add_edge("parse", END)

    return sg.compile()


async def run_vector_pipeline(
    raw_input: Optional[str],
    mode: Any = None,
    *,
    api_key: str,
    model_id: Optional[str] = None,
    provider: Optional[LLMProvider] = None,
) -> List[DiscoveryRecord]:
    """
    Request Builder -> Transport -> Parser for one user action.

    Raises ValidationError for blank input, TransportError when the call to the
    generation backend fails and ParseError when the reply holds no vector.
    """
    request = DiscoveryRequest.create(raw_input, mode)
    provider = provider or get_provider(model_id=model_id)
    t0 = time.time()

    logger.info(
        "vectors.generate.start",
        extra={"mode": request.mode.value, "model_id": provider.model_id, "input_chars": len(request.raw_input)},
    )
    graph = build_graph(provider)
    result = await graph.ainvoke({"request": request, "api_key": api_key})
    vectors = result["vectors"]

    logger.info(
        "vectors.generate.done",
        extra={"count": len(vectors), "duration_ms": int((time.time() - t0) * 1000)},
    )
    return vectors
