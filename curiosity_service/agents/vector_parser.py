from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from curiosity_service.errors import ParseError
from curiosity_service.models.discovery import (
    DEFAULT_SCORE,
    DEFAULT_TIER,
    DiscoveryRecord,
    VelocityTier,
)

logger = logging.getLogger(__name__)

MAX_VECTORS = 3
UNKNOWN_TITLE = "Unknown Vector"

VECTOR_MARKER = re.compile(r"###\s*⟁\s*VECTOR\s*\d+\s*:", re.I)

# (record key, label as written by the model, default)
TEXT_FIELDS: Tuple[Tuple[str, str, str], ...] = (
    ("collisionPoint", "Collision Point", "Unknown path"),
    ("hook", "The Hook", "..."),
    ("firstStep", "First Step", "Explore."),
)
VELOCITY_LABEL = "Escape Velocity"
SCORE_LABEL = "Serendipity Score"

KNOWN_LABELS = (VELOCITY_LABEL,) + tuple(label for _, label, _ in TEXT_FIELDS) + (SCORE_LABEL,)


def _label(label: str) -> str:
    # **Label:** with optional spaces, colon inside or outside the bold markers
    words = r"\s+".join(re.escape(w) for w in label.split())
    return r"\*\*\s*" + words + r"\s*:?\s*\*\*\s*:?"


_NEXT_LABEL = "|".join(_label(lbl) for lbl in KNOWN_LABELS)
_ANY_LABEL = re.compile(_NEXT_LABEL, re.I)

# A field ends at the next label, a horizontal rule, or a blank line followed
# by a paragraph that is not a label (trailing prose after the last vector).
_FIELD_END = (
    r"(?="
    + _NEXT_LABEL
    + r"|\n[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*(?:\n|\Z)"
    + r"|\n[ \t]*\n(?!\s*(?:" + _NEXT_LABEL + r"))"
    + r"|\Z)"
)

_TEXT_PATTERNS: Dict[str, re.Pattern] = {
    key: re.compile(_label(label) + r"\s*(.*?)\s*" + _FIELD_END, re.I | re.S)
    for key, label, _ in TEXT_FIELDS
}
_VELOCITY_PATTERN = re.compile(_label(VELOCITY_LABEL) + r"\s*\[?\s*(LOW|MEDIUM|HIGH)\b", re.I)
_SCORE_PATTERN = re.compile(_label(SCORE_LABEL) + r"\s*\[?\s*(\d+)", re.I)


def split_blocks(text: str) -> List[str]:
    """Blocks that follow a vector marker; the preamble and blank fragments are dropped."""
    parts = VECTOR_MARKER.split(text or "")
    return [p for p in parts[1:] if p.strip()]


def _title(block: str) -> str:
    # first non-blank line, unless the model skipped the title and went straight to a label
    for line in block.split("\n"):
        line = line.strip()
        if not line:
            continue
        return UNKNOWN_TITLE if _ANY_LABEL.match(line) else line
    return UNKNOWN_TITLE


def _velocity(block: str) -> VelocityTier:
    m = _VELOCITY_PATTERN.search(block)
    if not m:
        return DEFAULT_TIER
    return VelocityTier(m.group(1).upper())


def _score(block: str) -> int:
    m = _SCORE_PATTERN.search(block)
    # clamped to 1-10 by DiscoveryRecord
    return int(m.group(1)) if m else DEFAULT_SCORE


def _text_field(block: str, key: str, default: str) -> str:
    m = _TEXT_PATTERNS[key].search(block)
    value = m.group(1).strip() if m else ""
    return value or default


def parse_block(block: str) -> DiscoveryRecord:
    return DiscoveryRecord(
        title=_title(block),
        velocity_tier=_velocity(block),
        fields={key: _text_field(block, key, default) for key, _, default in TEXT_FIELDS},
        serendipity_score=_score(block),
    )


def parse_vectors(text: str, *, limit: Optional[int] = None) -> List[DiscoveryRecord]:
    """
    Turn a free-text model reply into at most ``limit`` discovery records.

    Each block is normalized on its own: a label that is missing or malformed
    falls back to its default, and a block that cannot be normalized at all is
    logged and skipped. Only a reply that yields no record raises ParseError.
    """
    # never more than MAX_VECTORS, whatever the caller asks for
    limit = MAX_VECTORS if limit is None else min(limit, MAX_VECTORS)
    vectors: List[DiscoveryRecord] = []
    for idx, block in enumerate(split_blocks(text)):
        try:
            vectors.append(parse_block(block))
        except Exception:
            logger.exception("vectors.parse.block_failed", extra={"block_index": idx})

    if not vectors:
        raise ParseError("could not parse any discovery record from the reply — unexpected format")

    if len(vectors) > limit:
        logger.info("vectors.parse.truncated", extra={"found": len(vectors), "kept": limit})
    return vectors[:limit]
