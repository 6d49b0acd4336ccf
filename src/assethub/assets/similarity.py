"""Edit-distance based string similarity used for fuzzy keyword matching."""

from __future__ import annotations


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character inserts, deletes and substitutions turning *a* into *b*."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    # Two-row dynamic programming over the shorter string.
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """Return ``(len(longer) - distance) / len(longer)``, in ``[0, 1]``.

    Two empty strings are identical (``1.0``).
    """
    longer, shorter = (a, b) if len(a) >= len(b) else (b, a)
    if not longer:
        return 1.0
    return (len(longer) - levenshtein_distance(longer, shorter)) / len(longer)
