from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..analysis.causal import CausalRelation, detect_relation
from ..analysis.similarity import cosine_similarity, semantic_similarity
from ..analysis.terms import extract_key_terms
from .models import Link, Node, new_id, pair_key

logger = logging.getLogger(__name__)

SEMANTIC_WEIGHT = 0.4
EMBEDDING_WEIGHT = 0.2
SAME_NEED_BONUS = 0.15
SAME_DIMENSION_BONUS = 0.1
PIPELINE_WEIGHT = 0.1

DEFAULT_THRESHOLD = 0.2
DEFAULT_MAX_PER_NODE = 8


@dataclass(frozen=True)
class PairScore:
    semantic: float
    embedding: float
    same_need: float
    same_dimension: float
    pipeline: float
    causal: CausalRelation

    @property
    def weight(self) -> float:
        return (
            self.semantic * SEMANTIC_WEIGHT
            + self.embedding * EMBEDDING_WEIGHT
            + self.same_need
            + self.same_dimension
            + self.pipeline
            + self.causal.score
        )

    @property
    def reason(self) -> str:
        out = f"{self.semantic * 100:.0f}% semantic similarity"
        if self.causal.type:
            out += f", {self.causal.type} relationship"
        return out


def score_pair(a: Node, b: Node) -> PairScore:
    """All link signals for the ordered pair (a, b); causal detection is directional."""
    return PairScore(
        semantic=semantic_similarity(a.text, b.text),
        embedding=cosine_similarity(a.structural_embedding, b.structural_embedding),
        same_need=SAME_NEED_BONUS if a.need == b.need else 0.0,
        same_dimension=SAME_DIMENSION_BONUS if a.dimension == b.dimension else 0.0,
        pipeline=(1.0 - abs(a.pipeline_score - b.pipeline_score)) * PIPELINE_WEIGHT,
        causal=detect_relation(a.text, b.text),
    )


def generate_links(
    nodes: Sequence[Node],
    threshold: float = DEFAULT_THRESHOLD,
    max_per_node: int = DEFAULT_MAX_PER_NODE,
) -> list[Link]:
    """Build the full link set over ``nodes`` from scratch.

    Each pair is scored once (earlier node as source). A source keeps only its
    ``max_per_node`` heaviest candidates at or above ``threshold``. Two questions
    that both lack key terms are never linked to each other.
    """
    has_terms = [bool(extract_key_terms(n.text)) for n in nodes]
    by_pair: dict[tuple[str, str], Link] = {}

    for i, a in enumerate(nodes):
        candidates: list[tuple[Node, PairScore, float]] = []
        for j in range(i + 1, len(nodes)):
            if not has_terms[i] and not has_terms[j]:
                continue
            b = nodes[j]
            score = score_pair(a, b)
            weight = score.weight
            if weight >= threshold:
                candidates.append((b, score, weight))

        # sort is stable: equal weights keep node order
        candidates.sort(key=lambda c: c[2], reverse=True)
        for b, score, weight in candidates[: int(max_per_node)]:
            key = pair_key(a.id, b.id)
            if key in by_pair:
                continue
            by_pair[key] = Link(
                id=new_id(),
                source=a.id,
                target=b.id,
                weight=weight,
                relation_type=score.causal.type,
                semantic_score=score.semantic,
                reason=score.reason,
            )

    links = list(by_pair.values())
    logger.info("Generated %d links for %d questions", len(links), len(nodes))
    if logger.isEnabledFor(logging.DEBUG):
        texts = {n.id: n.text for n in nodes}
        for link in [l for l in links if l.weight > 0.5][:5]:
            logger.debug(
                "Strong link %r <-> %r (%.0f%%): %s",
                texts[link.source][:40],
                texts[link.target][:40],
                link.weight * 100,
                link.reason,
            )
    return links
