from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from ..analysis.classify import classify
from ..analysis.similarity import structural_embed
from ..config import Settings
from ..demo import DEMO_QUESTIONS
from .links import generate_links
from .models import (
    NODE_STATUSES,
    STATUS_ANSWERED,
    GraphSnapshot,
    Link,
    Node,
    Participant,
    Room,
    new_id,
    now_ms,
)
from .rooms import detect_rooms, inherit_participants

logger = logging.getLogger(__name__)


class EngineError(RuntimeError):
    pass


class InvalidInput(EngineError, ValueError):
    pass


class NotFound(EngineError, KeyError):
    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class GraphStore:
    """Owns the questions, links and thinking rooms.

    Every mutation that changes the node set rebuilds links and rooms over all
    nodes. New collections are computed first and only swapped in when the
    rebuild succeeds, so a failure leaves the previous snapshot in place.

    Not thread-safe: callers must serialize mutating calls.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self._nodes: dict[str, Node] = {}
        self._links: list[Link] = []
        self._rooms: dict[str, Room] = {}

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def links(self) -> list[Link]:
        return list(self._links)

    @property
    def rooms(self) -> list[Room]:
        return list(self._rooms.values())

    def snapshot(self) -> GraphSnapshot:
        """Point-in-time copy; later mutations of the store do not show through."""
        return GraphSnapshot(
            nodes=[replace(n) for n in self._nodes.values()],
            links=self.links,
            rooms=[
                replace(r, question_ids=list(r.question_ids), participants=list(r.participants))
                for r in self._rooms.values()
            ],
        )

    def make_node(self, text: str) -> Node:
        text = (text or "").strip()
        if not text:
            raise InvalidInput("Question text is required")
        c = classify(text)
        return Node(
            id=new_id(),
            text=text,
            need=c.need,
            dimension=c.dimension,
            pipeline_score=c.pipeline_score,
            structural_embedding=structural_embed(text, dim=self.settings.embedding_dim),
        )

    def submit_question(self, text: str) -> Node:
        node = self.make_node(text)
        nodes = [*self._nodes.values(), node]
        links, rooms = self._rebuild(nodes, self.settings.link_threshold, self.settings.max_links_per_node)

        self._nodes[node.id] = node
        self._commit(links, rooms)
        logger.info("Question added: %r (%s/%s)", node.text[:50], node.need, node.dimension)
        return node

    def recompute_links(
        self,
        threshold: float | None = None,
        max_per_node: int | None = None,
    ) -> tuple[list[Link], list[Room]]:
        threshold = self.settings.link_threshold if threshold is None else float(threshold)
        max_per_node = self.settings.max_links_per_node if max_per_node is None else int(max_per_node)
        if threshold < 0:
            raise InvalidInput("threshold must be >= 0")
        if max_per_node < 1:
            raise InvalidInput("max_per_node must be >= 1")

        links, rooms = self._rebuild(self.nodes, threshold, max_per_node)
        self._commit(links, rooms)
        return self.links, self.rooms

    def remove_node(self, node_id: str) -> None:
        """Drop a question and its links.

        Rooms are not re-clustered; the id is only pruned from room membership,
        a room left with a single member is dropped, and the strength of the
        remaining rooms is refreshed against the smaller node count.
        """
        if node_id not in self._nodes:
            raise NotFound(f"Question not found: {node_id}")
        del self._nodes[node_id]
        self._links = [l for l in self._links if not l.touches(node_id)]

        for room in list(self._rooms.values()):
            if node_id not in room.question_ids:
                continue
            room.question_ids = [qid for qid in room.question_ids if qid != node_id]
            if len(room.question_ids) < 2:
                del self._rooms[room.id]

        for room in self._rooms.values():
            room.strength = len(room.question_ids) / len(self._nodes) * 100

    def get_node(self, node_id: str) -> Node:
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFound(f"Question not found: {node_id}")
        return node

    def set_status(self, node_id: str, status: str) -> Node:
        if status not in NODE_STATUSES:
            raise InvalidInput(f"Unknown status {status!r}; expected one of {', '.join(NODE_STATUSES)}")
        node = self.get_node(node_id)
        node.status = status
        return node

    def record_response(self, node_id: str) -> Node:
        """Mark a question answered once a response has been attached to it."""
        node = self.get_node(node_id)
        node.status = STATUS_ANSWERED
        node.last_answered_at = now_ms()
        return node

    def get_room(self, room_id: str) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise NotFound(f"Room not found: {room_id}")
        return room

    def join_room(self, room_id: str, user_id: str, user_name: str | None = None) -> Room:
        room = self.get_room(room_id)
        if not (user_id or "").strip():
            raise InvalidInput("user_id is required")
        if not any(p.user_id == user_id for p in room.participants):
            room.participants.append(
                Participant(user_id=user_id, user_name=user_name or "Anonymous", joined_at=now_ms())
            )
        return room

    def leave_room(self, room_id: str, user_id: str) -> Room:
        room = self.get_room(room_id)
        room.participants = [p for p in room.participants if p.user_id != user_id]
        return room

    def reset(self) -> None:
        self._nodes = {}
        self._links = []
        self._rooms = {}

    def seed_demo(self) -> GraphSnapshot:
        return self.replace_questions(DEMO_QUESTIONS)

    def replace_questions(self, texts: Iterable[str]) -> GraphSnapshot:
        """Replace the whole graph with ``texts`` and rebuild once."""
        nodes = [self.make_node(t) for t in texts]
        links, rooms = self._rebuild(nodes, self.settings.link_threshold, self.settings.max_links_per_node)

        self.reset()
        self._nodes = {n.id: n for n in nodes}
        self._commit(links, rooms)
        return self.snapshot()

    def _rebuild(self, nodes: list[Node], threshold: float, max_per_node: int) -> tuple[list[Link], list[Room]]:
        links = generate_links(nodes, threshold=threshold, max_per_node=max_per_node)
        rooms = detect_rooms(nodes, links, min_weight=self.settings.room_link_weight)
        inherit_participants(rooms, self.rooms)
        return links, rooms

    def _commit(self, links: list[Link], rooms: list[Room]) -> None:
        self._links = links
        self._rooms = {r.id: r for r in rooms}
