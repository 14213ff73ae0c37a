from __future__ import annotations

import logging
from collections import defaultdict
from typing import Sequence

from ..analysis.terms import extract_key_terms
from .models import Link, Node, Room, new_id

logger = logging.getLogger(__name__)

ROOM_LINK_WEIGHT = 0.45
MIN_ROOM_SIZE = 2
MAX_THEME_TERMS = 5
MAX_FALLBACK_THEME_CHARS = 100


def room_theme(members: Sequence[Node]) -> str:
    """Terms shared by at least two members, most widespread first.

    Falls back to the opening words of each member when nothing is shared.
    """
    member_counts: dict[str, int] = {}
    for node in members:
        for term in extract_key_terms(node.text):
            member_counts[term] = member_counts.get(term, 0) + 1

    common = [(t, c) for t, c in member_counts.items() if c >= 2]
    common.sort(key=lambda tc: tc[1], reverse=True)
    if common:
        return ", ".join(t for t, _ in common[:MAX_THEME_TERMS])

    openings = [" ".join(node.text.split(" ")[:3]) for node in members]
    return ", ".join(openings)[:MAX_FALLBACK_THEME_CHARS]


def detect_rooms(
    nodes: Sequence[Node],
    links: Sequence[Link],
    min_weight: float = ROOM_LINK_WEIGHT,
) -> list[Room]:
    """Group questions joined by strong links into thinking rooms.

    Nodes are visited in insertion order. An unvisited node opens a cluster
    and absorbs its unvisited strong neighbours, one hop only: absorbed nodes
    do not pull in their own neighbours. The result therefore depends on node
    order, which is intended.
    """
    by_id = {n.id: n for n in nodes}
    strong: dict[str, list[str]] = defaultdict(list)
    for link in links:
        if link.weight > min_weight:
            strong[link.source].append(link.target)
            strong[link.target].append(link.source)

    visited: set[str] = set()
    clusters: list[list[Node]] = []
    for node in nodes:
        if node.id in visited:
            continue
        cluster = [node]
        visited.add(node.id)
        for other_id in strong.get(node.id, []):
            other = by_id.get(other_id)
            if other is not None and other_id not in visited:
                cluster.append(other)
                visited.add(other_id)
        if len(cluster) >= MIN_ROOM_SIZE:
            clusters.append(cluster)

    total = len(nodes)
    rooms = [
        Room(
            id=new_id(),
            name=f"{cluster[0].need} Room {idx}",
            theme=room_theme(cluster),
            question_ids=[n.id for n in cluster],
            strength=len(cluster) / total * 100,
        )
        for idx, cluster in enumerate(clusters, start=1)
    ]
    logger.info("Detected %d thinking rooms", len(rooms))
    return rooms


def inherit_participants(rooms: Sequence[Room], previous: Sequence[Room]) -> int:
    """Carry id, participants and creation time over to rooms with an unchanged member set.

    Rooms whose membership changed in any way start empty. Returns how many
    rooms were matched.
    """
    old_by_members = {frozenset(r.question_ids): r for r in previous}
    matched = 0
    for room in rooms:
        old = old_by_members.get(frozenset(room.question_ids))
        if old is None:
            continue
        room.id = old.id
        room.created_at = old.created_at
        room.participants = list(old.participants)
        matched += 1
        logger.debug("Room %s kept %d participant(s)", room.id, len(room.participants))
    return matched
