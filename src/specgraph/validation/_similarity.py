"""String similarity for "did you mean" suggestions."""

from collections.abc import Iterable

# Candidates must be at least this similar to be suggested
SUGGESTION_THRESHOLD = 0.6
MAX_SUGGESTIONS = 3


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between two strings."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return a similarity ratio in 0..1 derived from the edit distance.

    Identical strings score 1; comparing against an empty string scores 0.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1 - levenshtein(a, b) / max(len(a), len(b))


def suggest(value: str, candidates: Iterable[str]) -> list[str]:
    """Return the candidates most similar to ``value``, best first.

    Only candidates scoring above the suggestion threshold are returned,
    at most three of them; ties keep candidate order.
    """
    scored = [
        (score, candidate)
        for candidate in candidates
        if (score := similarity(value, candidate)) > SUGGESTION_THRESHOLD
    ]
    scored.sort(key=lambda pair: -pair[0])
    return [candidate for _, candidate in scored[:MAX_SUGGESTIONS]]
