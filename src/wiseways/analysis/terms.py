from __future__ import annotations

import re

# Runs of Latin letters, including the accented letters used in French.
_WORD_RE = re.compile(r"[a-zàâäéèêëïîôùûüÿæœç]+")

# English + French function words.
STOPWORDS = frozenset(
    {
        "the",
        "a",
        "an",
        "and",
        "or",
        "but",
        "in",
        "on",
        "at",
        "to",
        "for",
        "of",
        "with",
        "by",
        "from",
        "up",
        "about",
        "into",
        "through",
        "during",
        "is",
        "are",
        "was",
        "were",
        "be",
        "been",
        "being",
        "have",
        "has",
        "had",
        "do",
        "does",
        "did",
        "will",
        "would",
        "should",
        "could",
        "can",
        "may",
        "le",
        "la",
        "les",
        "un",
        "une",
        "des",
        "de",
        "du",
        "et",
        "ou",
        "mais",
        "dans",
        "sur",
        "pour",
        "avec",
        "par",
        "est",
        "sont",
        "être",
        "avoir",
    }
)

_ACTION_TERMS = (
    "improve",
    "create",
    "develop",
    "implement",
    "build",
    "design",
    "innovate",
    "optimize",
    "enhance",
    "transform",
    "améliorer",
    "créer",
    "développer",
    "implémenter",
)

_STRATEGIC_TERMS = (
    "strategy",
    "vision",
    "goal",
    "objective",
    "mission",
    "future",
    "plan",
    "roadmap",
    "direction",
    "stratégie",
)

_CORE_TERMS = (
    "team",
    "collaboration",
    "communication",
    "culture",
    "innovation",
    "growth",
    "quality",
    "performance",
    "customer",
    "user",
    "client",
    "experience",
    "équipe",
    "croissance",
    "qualité",
)

_NEED_TERMS = (
    "health",
    "safety",
    "security",
    "learning",
    "education",
    "creativity",
    "identity",
    "freedom",
    "participation",
)

TERM_WEIGHTS: dict[str, float] = {
    **{t: 3.0 for t in _ACTION_TERMS + _STRATEGIC_TERMS},
    **{t: 2.5 for t in _CORE_TERMS},
    **{t: 2.0 for t in _NEED_TERMS},
}

DEFAULT_WEIGHT = 1.0
MIN_TERM_CHARS = 4


def tokenize(text: str) -> list[str]:
    """Lower-cased letter runs, in order of appearance."""
    return _WORD_RE.findall(text.lower())


def term_weight(term: str) -> float:
    return TERM_WEIGHTS.get(term.lower(), DEFAULT_WEIGHT)


def extract_key_terms(text: str) -> dict[str, float]:
    """Return {term: accumulated_weight} for the meaningful words of ``text``.

    Short tokens (three letters or fewer) and stopwords are dropped. Each
    occurrence adds the term's importance weight again, so a repeated word
    counts more than a word mentioned once.
    """
    terms: dict[str, float] = {}
    for tok in tokenize(text):
        if len(tok) < MIN_TERM_CHARS or tok in STOPWORDS:
            continue
        terms[tok] = terms.get(tok, 0.0) + term_weight(tok)
    return terms
