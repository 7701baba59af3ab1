"""Profile Similarity — string, location and tag-answer similarity in [0.0, 1.0].

Invariants:
    - All comparisons are case-insensitive and ignore surrounding whitespace
    - Empty input on either side always yields 0.0; "0" counts as empty, as do
      "0" words in a location
    - Identical normalized input always yields 1.0

Design Decisions:
    - similar_text is the classic recursive longest-common-substring measure
      (Oliver's algorithm), kept exact so scores stay comparable with data
      computed by the previous PHP deployment
"""


def is_blank(value: str | None) -> bool:
    """Empty, or the single character "0" (legacy scores treat both as unset)."""
    return not value or value == "0"


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def similar_text(first: str, second: str) -> int:
    """Number of matching characters (Oliver's algorithm).

    Finds the longest common substring, then recurses on the pieces to its
    left and right. Ties keep the first match found scanning `first`, then
    `second`.
    """
    if not first or not second:
        return 0
    best = 0
    pos1 = pos2 = 0
    for i in range(len(first)):
        for j in range(len(second)):
            k = 0
            while (
                i + k < len(first)
                and j + k < len(second)
                and first[i + k] == second[j + k]
            ):
                k += 1
            if k > best:
                best, pos1, pos2 = k, i, j
    if best == 0:
        return 0
    return (
        best
        + similar_text(first[:pos1], second[:pos2])
        + similar_text(first[pos1 + best:], second[pos2 + best:])
    )


def string_similarity(a: str | None, b: str | None) -> float:
    a, b = _normalize(a), _normalize(b)
    if is_blank(a) or is_blank(b):
        return 0.0
    if a == b:
        return 1.0
    return similar_text(a, b) * 2 / (len(a) + len(b))


def location_similarity(a: str | None, b: str | None) -> float:
    """Exact 1.0, containment 0.7, shared words up to 0.5."""
    a, b = _normalize(a), _normalize(b)
    if is_blank(a) or is_blank(b):
        return 0.0
    if a == b:
        return 1.0
    if a in b or b in a:
        return 0.7
    words_a = [w for w in a.split(" ") if not is_blank(w)]
    words_b = [w for w in b.split(" ") if not is_blank(w)]
    common = [w for w in words_a if w in words_b]
    if common:
        return min(0.5, len(common) / max(len(words_a), len(words_b)))
    return 0.0


def question_similarity(answers_a: list[str], answers_b: list[str]) -> float:
    """Share of answers_a found in answers_b over the de-duplicated union."""
    if not answers_a or not answers_b:
        return 0.0
    in_b = set(answers_b)
    common = sum(1 for answer in answers_a if answer in in_b)
    union = set(answers_a) | in_b
    return common / len(union)
