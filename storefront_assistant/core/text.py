"""
Text processing utilities.

Normalizes shopper queries before intent matching: lowercases, drops generic
English stopwords, then strips politeness/filler phrases.
"""

import re

# Generic English function words. Words the classifier keys on
# (cart, sort, price, name, less, than, show, desc...) must never appear here.
STOPWORDS = frozenset(
    """
    a about above after again against all also am an and another any are as at
    be because been before being below between both but by
    can could did do does doing down during each few for from further
    had has have having he her here hers herself him himself his how
    i if in into is it its itself just me might more most must my myself
    no nor not now of off on once only or other our ours ourselves out over own
    same she should so some such that the their theirs them themselves then there
    these they this those through to too under until up very
    was we were what when where which while who whom why will with would
    you your yours yourself yourselves
    """.split()
)

# Politeness/filler phrases removed as whole words. Multi-word phrases are
# matched atomically (longest first).
FILLER_PHRASES = (
    "please", "could you", "would you", "can you", "show me", "i want", "i need",
    "find", "the", "a", "an", "to", "for", "me", "my", "with", "of", "on", "in",
    "at", "by", "from", "and", "or", "that", "this", "these", "those", "just",
    "only", "now", "all", "any", "some", "like", "about", "give", "get", "tell",
    "list", "display", "see", "let me", "let", "how", "much", "many", "which",
    "what", "is", "are", "was", "were", "be", "as", "it", "do", "does", "did",
    "will", "should", "could", "would", "may", "might", "must", "shall", "want",
    "need", "help", "assist", "assist me", "help me",
)

_FILLER_RE = re.compile(
    r"\b(?:"
    + "|".join(
        re.escape(p) for p in sorted(FILLER_PHRASES, key=lambda p: (-len(p.split()), -len(p)))
    )
    + r")\b",
    re.IGNORECASE,
)


def _drop_stopwords(tokens: list[str]) -> list[str]:
    return [t for t in tokens if t not in STOPWORDS]


def normalize(raw: str) -> str:
    """
    Normalize a raw query for intent matching.

    Args:
        raw: Query as typed or transcribed

    Returns:
        Lowercased query with stopwords and filler phrases removed,
        tokens joined by single spaces. Empty input yields "".
    """
    tokens = _drop_stopwords(raw.lower().split())
    stripped = _FILLER_RE.sub(" ", " ".join(tokens))

    # Phrase removal can split a token apart; filter the pieces again so a
    # second pass has nothing left to remove.
    return " ".join(_drop_stopwords(stripped.split())).strip()
