from __future__ import annotations

import re
from dataclasses import dataclass

UNKNOWN = "UNKNOWN"


def _words(*alternatives: str) -> re.Pattern[str]:
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE)


# Max-Neef needs. Order matters: ties go to the label listed first.
NEED_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (
        "SUBSISTENCE",
        _words(
            "food", "health", "shelter", "work", "income", "salary", "revenue", "survive", "basic",
            "essential", "subsistence", "alimentation", "santé", "revenu",
        ),
    ),
    (
        "PROTECTION",
        _words(
            "safety", "security", "protect", "risk", "insurance", "legal", "rights", "defense", "care",
            "sécurité", "protection", "défense",
        ),
    ),
    (
        "AFFECTION",
        _words(
            "love", "friend", "family", "relationship", "care", "emotion", "affection", "belonging",
            "connect", "amour", "amitié", "famille", "relation",
        ),
    ),
    (
        "UNDERSTANDING",
        _words(
            "learn", "understand", "educat", "knowledge", "training", "skill", "study", "research",
            "analyze", "apprendre", "comprendre", "éducation", "connaissance", "formation",
        ),
    ),
    (
        "PARTICIPATION",
        _words(
            "participate", "engage", "involve", "contribute", "collaborate", "team", "group",
            "community", "vote", "participer", "engager", "équipe", "communauté",
        ),
    ),
    (
        "CREATION",
        _words(
            "create", "innovate", "design", "build", "develop", "invent", "art", "imagine", "express",
            "créer", "innover", "concevoir", "développer", "inventer",
        ),
    ),
    (
        "IDENTITY",
        _words(
            "identity", "who", "self", "personal", "individual", "unique", "character", "belong",
            "culture", "identité", "personnel", "individuel",
        ),
    ),
    (
        "FREEDOM",
        _words(
            "freedom", "choice", "autonomy", "independent", "decide", "liberty", "flexible", "option",
            "liberté", "choix", "autonomie", "indépendant",
        ),
    ),
    (
        "IDLENESS",
        _words(
            "rest", "relax", "leisure", "play", "fun", "enjoy", "vacation", "hobby", "entertain", "game",
            "repos", "détente", "loisir", "jeu", "vacances",
        ),
    ),
]

DIMENSION_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    (
        "BEING",
        _words("is", "am", "are", "being", "exist", "state", "condition", "quality", "attribute", "être", "état", "qualité"),
    ),
    (
        "HAVING",
        _words(
            "have", "has", "own", "possess", "resource", "asset", "tool", "material", "property",
            "avoir", "posséder", "ressource", "outil",
        ),
    ),
    (
        "DOING",
        _words(
            "do", "does", "action", "activity", "work", "perform", "execute", "implement", "practice",
            "faire", "activité", "exécuter",
        ),
    ),
    (
        "INTERACTING",
        _words(
            "interact", "with", "between", "relation", "network", "collaborate", "communicate", "meet",
            "interagir", "avec", "entre", "communiquer",
        ),
    ),
]

NEED_LABELS = [label for label, _ in NEED_PATTERNS]
DIMENSION_LABELS = [label for label, _ in DIMENSION_PATTERNS]

_STRATEGIC_RE = _words(
    "strategy", "vision", "future", "plan", "goal", "objective", "why", "purpose", "mission",
    "stratégie", "futur", "objectif",
)
_EXECUTION_RE = _words(
    "implement", "execute", "deliver", "now", "today", "urgent", "deadline", "task", "action",
    "implémenter", "exécuter", "livrer", "tâche",
)

NEUTRAL_PIPELINE_SCORE = 0.5


@dataclass(frozen=True)
class Classification:
    need: str
    dimension: str
    pipeline_score: float


def best_label(text: str, patterns: list[tuple[str, re.Pattern[str]]]) -> str:
    """Label with the strictly highest match count; first listed wins ties."""
    best, best_count = UNKNOWN, 0
    for label, pattern in patterns:
        count = len(pattern.findall(text))
        if count > best_count:
            best, best_count = label, count
    return best


def pipeline_score(text: str) -> float:
    """0 leans strategic, 1 leans execution; 0.5 when neither vocabulary appears.

    The +1 in the denominator damps scores built from very few matches.
    """
    lower = text.lower()
    strategic = len(_STRATEGIC_RE.findall(lower))
    execution = len(_EXECUTION_RE.findall(lower))
    if strategic == 0 and execution == 0:
        return NEUTRAL_PIPELINE_SCORE
    return execution / (strategic + execution + 1)


def classify(text: str) -> Classification:
    lower = text.lower()
    return Classification(
        need=best_label(lower, NEED_PATTERNS),
        dimension=best_label(lower, DIMENSION_PATTERNS),
        pipeline_score=pipeline_score(lower),
    )
