from typing import Any, Dict, List, TypedDict

from curiosity_service.models.discovery import DiscoveryRecord, DiscoveryRequest

class VectorState(TypedDict, total=False):
    request: DiscoveryRequest
    api_key: str
    payload: Dict[str, Any]
    reply_text: str
    vectors: List[DiscoveryRecord]
