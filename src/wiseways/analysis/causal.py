from __future__ import annotations

import re
from dataclasses import dataclass

PROBLEM_SOLUTION = "problem-solution"
CAUSE_EFFECT = "cause-effect"
DEPENDENCY = "dependency"

CAUSAL_PATTERNS: dict[str, re.Pattern[str]] = {
    "cause": re.compile(r"\b(?:cause|lead|result|enable|create|produce|generate|drive)\b", re.IGNORECASE),
    "effect": re.compile(r"\b(?:impact|affect|influence|change|improve|reduce|increase)\b", re.IGNORECASE),
    "dependency": re.compile(r"\b(?:require|need|depend|rely|based on|prerequisite)\b", re.IGNORECASE),
    "solution": re.compile(r"\b(?:solve|address|fix|resolve|answer|handle)\b", re.IGNORECASE),
    "problem": re.compile(r"\b(?:problem|issue|challenge|obstacle|difficulty|concern)\b", re.IGNORECASE),
}

PROBLEM_SOLUTION_SCORE = 0.3
CAUSE_EFFECT_SCORE = 0.25
DEPENDENCY_SCORE = 0.2


@dataclass(frozen=True)
class CausalRelation:
    score: float = 0.0
    type: str | None = None


def _has(kind: str, text: str) -> bool:
    return CAUSAL_PATTERNS[kind].search(text) is not None


def detect_relation(text_a: str, text_b: str) -> CausalRelation:
    """Detect a directed relation from ``text_a`` to ``text_b``.

    Scores from every rule that fires are added up, but the type is the first
    one assigned: problem-solution, then cause-effect, then dependency.
    """
    score = 0.0
    rel_type: str | None = None

    if _has("problem", text_a) and _has("solution", text_b):
        score += PROBLEM_SOLUTION_SCORE
        rel_type = PROBLEM_SOLUTION

    if _has("cause", text_a) and _has("effect", text_b):
        score += CAUSE_EFFECT_SCORE
        rel_type = rel_type or CAUSE_EFFECT

    if _has("dependency", text_a) or _has("dependency", text_b):
        score += DEPENDENCY_SCORE
        rel_type = rel_type or DEPENDENCY

    return CausalRelation(score=score, type=rel_type)
