from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Link generation defaults (used by submit + recompute when not overridden).
    link_threshold: float = float(os.getenv("WISEWAYS_LINK_THRESHOLD", "0.2"))
    max_links_per_node: int = int(os.getenv("WISEWAYS_MAX_LINKS_PER_NODE", "8"))

    # Links strictly above this weight pull questions into the same room.
    room_link_weight: float = float(os.getenv("WISEWAYS_ROOM_LINK_WEIGHT", "0.45"))

    # Structural embedding
    embedding_dim: int = int(os.getenv("WISEWAYS_EMBEDDING_DIM", "100"))

    log_level: str = os.getenv("WISEWAYS_LOG_LEVEL", "WARNING")
