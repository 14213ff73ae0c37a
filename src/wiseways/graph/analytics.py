from __future__ import annotations

from typing import Any

from .models import NODE_STATUSES, STATUS_ANSWERED, GraphSnapshot

STRONG_LINK = 0.5
MEDIUM_LINK = 0.3


def link_strength(weight: float) -> str:
    if weight > STRONG_LINK:
        return "strong"
    if weight > MEDIUM_LINK:
        return "medium"
    return "weak"


def compute_analytics(snapshot: GraphSnapshot) -> dict[str, Any]:
    need_dist: dict[str, int] = {}
    dim_dist: dict[str, int] = {}
    status_dist: dict[str, int] = {s: 0 for s in NODE_STATUSES}
    for n in snapshot.nodes:
        need_dist[n.need] = need_dist.get(n.need, 0) + 1
        dim_dist[n.dimension] = dim_dist.get(n.dimension, 0) + 1
        status_dist[n.status] = status_dist.get(n.status, 0) + 1

    strength = {"strong": 0, "medium": 0, "weak": 0}
    for l in snapshot.links:
        strength[link_strength(l.weight)] += 1

    total = len(snapshot.nodes)
    return {
        "totalQuestions": total,
        "totalLinks": len(snapshot.links),
        "linkStrength": strength,
        "totalRooms": len(snapshot.rooms),
        "activeRooms": sum(1 for r in snapshot.rooms if r.participants),
        "needDistribution": need_dist,
        "dimensionDistribution": dim_dist,
        "statusDistribution": status_dist,
        "responseRate": (status_dist[STATUS_ANSWERED] / total * 100) if total else 0.0,
    }
