from __future__ import annotations

import math
import re
from collections import Counter
from typing import Sequence

import numpy as np

from .terms import extract_key_terms

EMBEDDING_DIM = 100

_TOKEN_RE = re.compile(r"\w+")


def semantic_similarity(text_a: str, text_b: str) -> float:
    """Cosine similarity of the weighted key-term maps of two texts."""
    terms_a = extract_key_terms(text_a)
    terms_b = extract_key_terms(text_b)
    if not terms_a or not terms_b:
        return 0.0

    dot = sum(w * terms_b[t] for t, w in terms_a.items() if t in terms_b)
    mag_a = math.sqrt(sum(w * w for w in terms_a.values()))
    mag_b = math.sqrt(sum(w * w for w in terms_b.values()))
    if mag_a == 0.0 or mag_b == 0.0:
        return 0.0
    return min(1.0, dot / (mag_a * mag_b))


def stable_hash(token: str) -> int:
    # 31-multiplier rolling hash, wrapped to signed 32-bit so it is stable across runs
    # (unlike the builtin hash(), which is salted per process).
    h = 0
    for ch in token:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def structural_embed(text: str, dim: int = EMBEDDING_DIM) -> np.ndarray:
    """Hashed bag-of-words sketch: each distinct token adds its count to one slot.

    Collisions are expected; this is a cheap structural fingerprint, not a
    semantic representation.
    """
    vec = np.zeros(int(dim), dtype=np.float64)
    counts = Counter(_TOKEN_RE.findall(text.lower()))
    for token, count in counts.items():
        vec[abs(stable_hash(token)) % int(dim)] += count
    return vec


def cosine_similarity(a: Sequence[float] | np.ndarray | None, b: Sequence[float] | np.ndarray | None) -> float:
    """Cosine of two vectors; 0.0 for empty or zero-magnitude input.

    Vectors of different length are compared as if the shorter one were
    zero-padded.
    """
    if a is None or b is None:
        return 0.0
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.size == 0 or vb.size == 0:
        return 0.0

    n = min(va.size, vb.size)
    dot = float(np.dot(va[:n], vb[:n]))
    mag_a = float(np.linalg.norm(va))
    mag_b = float(np.linalg.norm(vb))
    if mag_a == 0.0 or mag_b == 0.0:
        return 0.0
    return max(0.0, min(1.0, dot / (mag_a * mag_b)))
