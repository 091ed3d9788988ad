"""
Fuzzy Match Engine

Scores free-text queries against titles. Substring hits score above 100,
in-order subsequence hits earn per-character points weighted toward the
start of the text, and a score of 0 means no match.
"""
from collections.abc import Sequence


EMPTY_QUERY_SCORE = 1000
SUBSTRING_BASE = 100
MATCH_POINTS = 10
POSITION_BONUS_LIMIT = 50
COMPLETION_BONUS = 20


def score(query: str, text: str) -> int:
    """
    Score how well query matches text (case-insensitive)

    Args:
        query: Free-text search query
        text: Candidate text

    Returns:
        EMPTY_QUERY_SCORE for an empty query, 100 + (100 - len(query)) for a
        substring hit, otherwise the accumulated subsequence score (0 when
        nothing matched)
    """
    query = query.lower()
    text = text.lower()

    if not query:
        return EMPTY_QUERY_SCORE

    if query in text:
        return SUBSTRING_BASE + (SUBSTRING_BASE - len(query))

    total = 0
    matched = 0
    for position, char in enumerate(text):
        if matched < len(query) and char == query[matched]:
            total += MATCH_POINTS + max(0, POSITION_BONUS_LIMIT - position)
            matched += 1

    if matched == len(query):
        total += COMPLETION_BONUS

    return total


def rank(query: str, candidates: Sequence[str]) -> list[tuple[int, int]]:
    """
    Rank candidates against query

    Returns:
        (index, score) pairs for candidates scoring above 0, best first;
        equal scores keep input order
    """
    scored = [(index, score(query, text)) for index, text in enumerate(candidates)]
    matches = [pair for pair in scored if pair[1] > 0]
    return sorted(matches, key=lambda pair: -pair[1])
