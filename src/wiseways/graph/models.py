from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import Any

import numpy as np

STATUS_UNANSWERED = "unanswered"
STATUS_IN_PROGRESS = "in-progress"
STATUS_ANSWERED = "answered"
NODE_STATUSES = (STATUS_UNANSWERED, STATUS_IN_PROGRESS, STATUS_ANSWERED)

ROOM_OPEN = "open"


def new_id() -> str:
    return uuid.uuid4().hex


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(eq=False)
class Node:
    id: str
    text: str
    need: str
    dimension: str
    pipeline_score: float
    structural_embedding: np.ndarray  # shape [dim], raw token counts per hashed slot
    status: str = STATUS_UNANSWERED
    created_at: int = field(default_factory=now_ms)
    last_answered_at: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "need": self.need,
            "dimension": self.dimension,
            "pipelineScore": self.pipeline_score,
            "structuralEmbedding": [float(x) for x in self.structural_embedding],
            "status": self.status,
            "createdAt": self.created_at,
        }
        if self.last_answered_at is not None:
            out["lastAnsweredAt"] = self.last_answered_at
        return out


@dataclass(frozen=True)
class Link:
    id: str
    source: str
    target: str
    weight: float
    relation_type: str | None
    semantic_score: float
    reason: str

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
            "relationType": self.relation_type,
            "semanticScore": self.semantic_score,
            "reason": self.reason,
        }


def pair_key(a: str, b: str) -> tuple[str, str]:
    """Order-independent key for an unordered node pair."""
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class Participant:
    user_id: str
    user_name: str
    joined_at: int

    def to_dict(self) -> dict[str, Any]:
        return {"userId": self.user_id, "userName": self.user_name, "joinedAt": self.joined_at}


@dataclass
class Room:
    id: str
    name: str
    theme: str
    question_ids: list[str]
    strength: float  # percent of all questions that sit in this room
    participants: list[Participant] = field(default_factory=list)
    status: str = ROOM_OPEN
    created_at: int = field(default_factory=now_ms)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "theme": self.theme,
            "questionIds": list(self.question_ids),
            "participants": [p.to_dict() for p in self.participants],
            "status": self.status,
            "createdAt": self.created_at,
            "strength": self.strength,
        }


@dataclass(frozen=True)
class GraphSnapshot:
    nodes: list[Node]
    links: list[Link]
    rooms: list[Room]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "links": [l.to_dict() for l in self.links],
            "thinkingRooms": [r.to_dict() for r in self.rooms],
        }
