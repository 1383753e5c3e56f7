"""
Fuzzy Matching for Component Names

Lets callers find a component by an approximate, misspelled or abbreviated
name. Scoring takes the best of several independent heuristics and adds a
small boost for matching metadata:

- "architect" → "architect"                     exact (100)
- "arch"      → "architect"                     prefix (80)
- "tect"      → "architect"                     substring (60)
- "apm"       → "autonomous-project-manager"    acronym (70 × word coverage)
- "amgr"      → "autonomous-project-manager"    subsequence (30 × char coverage)

All functions are pure: the interactive/non-interactive decision is an
explicit argument, not ambient state.
"""

import logging
import re
from dataclasses import dataclass, replace

from .models import ORIGIN_PRECEDENCE, ComponentInfo, FuzzyMatch, ResolvedComponent

logger = logging.getLogger(__name__)


# =============================================================================
# SCORING CONSTANTS
# =============================================================================

SCORE_EXACT = 100
SCORE_STARTS_WITH = 80
SCORE_ACRONYM = 70
SCORE_SUBSTRING = 60
SCORE_PARTIAL_WORD = 50
SCORE_PARTIAL_CHAR = 30

# Word-level containment scores lower than a word prefix
WORD_CONTAINS_FACTOR = 0.7

METADATA_DESCRIPTION_BOOST = 5
METADATA_TAG_BOOST = 3
METADATA_BOOST_CAP = 15

# Auto-selection thresholds
AUTO_SELECT_MIN_SCORE = 80
AUTO_SELECT_MIN_LEAD = 20

SUGGESTION_MIN_SCORE = 10

WORD_SPLIT = re.compile(r"[-_\s]+")


@dataclass
class FuzzyMatchOptions:
    max_results: int = 10
    min_score: int = 20
    case_sensitive: bool = False
    include_metadata: bool = True
    # None defers to the caller's non_interactive flag
    auto_select_best: bool | None = None


def _split_words(name: str) -> list[str]:
    return [word for word in WORD_SPLIT.split(name) if word]


# =============================================================================
# HEURISTICS
# =============================================================================


def _acronym_score(query: str, name: str) -> int:
    """Match query characters against consecutive word initials from word 0."""
    words = _split_words(name)
    if len(words) < len(query):
        return 0

    matched = 0
    for char, word in zip(query, words):
        if char != word[0]:
            break
        matched += 1

    if matched == len(query) and matched > 1:
        return int(SCORE_ACRONYM * matched / len(words))
    return 0


def _word_score(query: str, name: str) -> int:
    best = 0
    for word in _split_words(name):
        if word.startswith(query):
            best = max(best, int(SCORE_PARTIAL_WORD * len(query) / len(word)))
        elif query in word:
            best = max(
                best,
                int(SCORE_PARTIAL_WORD * len(query) / len(word) * WORD_CONTAINS_FACTOR),
            )
    return best


def _subsequence_score(query: str, name: str) -> int:
    query_index = 0
    for char in name:
        if query_index == len(query):
            break
        if char == query[query_index]:
            query_index += 1

    if query_index == len(query):
        return int(SCORE_PARTIAL_CHAR * query_index / max(len(query), len(name)))
    return 0


def _metadata_boost(query: str, component: ComponentInfo) -> int:
    metadata = component.metadata
    if not metadata or not metadata.is_semantic:
        return 0

    boost = 0
    description = metadata.description
    if description and query in description.lower():
        boost += METADATA_DESCRIPTION_BOOST

    for tag in metadata.tags:
        if query in tag.lower():
            boost += METADATA_TAG_BOOST

    return min(boost, METADATA_BOOST_CAP)


def calculate_score(
    query: str,
    name: str,
    component: ComponentInfo | None = None,
    include_metadata: bool = True,
) -> int:
    """
    Score an already-normalized query against an already-normalized name.

    Returns:
        Integer score in [0, 100]
    """
    if query == name:
        return SCORE_EXACT

    score = 0
    if name.startswith(query):
        score = SCORE_STARTS_WITH
    elif query in name:
        score = SCORE_SUBSTRING

    score = max(
        score,
        _acronym_score(query, name),
        _word_score(query, name),
        _subsequence_score(query, name),
    )

    if include_metadata and component is not None:
        score += _metadata_boost(query, component)

    return max(0, min(score, SCORE_EXACT))


def determine_match_type(query: str, name: str) -> str:
    """Classify a match as exact, substring, acronym or partial (in that priority)."""
    if query == name:
        return "exact"
    if query in name:
        return "substring"

    words = _split_words(name)
    if len(words) >= len(query) and all(
        char == word[0] for char, word in zip(query, words)
    ):
        return "acronym"

    return "partial"


def ranking_key(match: FuzzyMatch) -> tuple:
    """Score descending, then origin precedence descending, then name."""
    return (-match.score, -ORIGIN_PRECEDENCE[match.origin], match.name)


# =============================================================================
# PUBLIC API
# =============================================================================


def find_matches(
    query: str,
    candidates: list[ResolvedComponent],
    options: FuzzyMatchOptions | None = None,
) -> list[FuzzyMatch]:
    """
    Rank candidates against a query.

    Args:
        query: Approximate component name
        candidates: Components with their origins
        options: Matching options (defaults: 10 results, min score 20)

    Returns:
        Matches scoring at least ``min_score``, sorted by score descending,
        then origin precedence (project > global > builtin), then name;
        truncated to ``max_results``
    """
    options = options or FuzzyMatchOptions()
    if not query or not query.strip():
        return []

    normalized_query = query if options.case_sensitive else query.lower()
    matches: list[FuzzyMatch] = []

    for candidate in candidates:
        component = candidate.component
        name = component.name if options.case_sensitive else component.name.lower()
        score = calculate_score(normalized_query, name, component, options.include_metadata)

        if score >= options.min_score:
            matches.append(
                FuzzyMatch(
                    name=component.name,
                    score=score,
                    match_type=determine_match_type(normalized_query, name),
                    origin=candidate.origin,
                    component=component,
                )
            )

    matches.sort(key=ranking_key)
    return matches[: options.max_results]


def find_best_match(
    query: str,
    candidates: list[ResolvedComponent],
    options: FuzzyMatchOptions | None = None,
) -> FuzzyMatch | None:
    options = replace(options or FuzzyMatchOptions(), max_results=1)
    matches = find_matches(query, candidates, options)
    return matches[0] if matches else None


def should_auto_select(matches: list[FuzzyMatch]) -> bool:
    """
    Decide whether the top match is confident enough to pick without asking.

    Auto-select when the best match scores 100, scores at least 80 and is
    either alone or more than 20 points ahead of the runner-up, or is an
    exact string match.
    """
    if not matches:
        return False

    best = matches[0]
    if best.score >= SCORE_EXACT:
        return True
    if best.score >= AUTO_SELECT_MIN_SCORE and (
        len(matches) == 1 or best.score > matches[1].score + AUTO_SELECT_MIN_LEAD
    ):
        return True
    return best.match_type == "exact"


def find_matches_for_mode(
    query: str,
    candidates: list[ResolvedComponent],
    options: FuzzyMatchOptions | None = None,
    non_interactive: bool = False,
) -> list[FuzzyMatch]:
    """
    Rank candidates, applying the auto-selection policy when not interactive.

    Interactive callers get the full ranked list to choose from. Otherwise
    the result is either a single confident match or [] when the query is
    ambiguous. ``options.auto_select_best`` overrides ``non_interactive``.
    """
    options = options or FuzzyMatchOptions()
    auto_select = (
        options.auto_select_best if options.auto_select_best is not None else non_interactive
    )

    matches = find_matches(query, candidates, options)
    if not auto_select:
        return matches

    if should_auto_select(matches):
        logger.debug(f"Auto-selected '{matches[0].name}' ({matches[0].score}) for query '{query}'")
        return [matches[0]]

    if matches:
        logger.debug(f"Query '{query}' is ambiguous across {len(matches)} matches")
    return []


def generate_suggestions(
    query: str,
    candidates: list[ResolvedComponent],
    max_suggestions: int = 3,
) -> list[str]:
    """
    Suggest component names for a query that found nothing usable.

    Uses a lower score floor, then tops up with components sharing at least
    one delimiter-separated word with the query.
    """
    matches = find_matches(
        query,
        candidates,
        FuzzyMatchOptions(max_results=max_suggestions * 2, min_score=SUGGESTION_MIN_SCORE),
    )

    suggestions: list[str] = []
    for match in matches:
        if len(suggestions) >= max_suggestions:
            break
        if match.name not in suggestions:
            suggestions.append(match.name)

    if len(suggestions) < max_suggestions:
        query_words = [word.lower() for word in _split_words(query)]
        for candidate in candidates:
            if len(suggestions) >= max_suggestions:
                break
            name = candidate.component.name
            if name in suggestions:
                continue

            name_words = [word.lower() for word in _split_words(name)]
            if any(q in w or w in q for q in query_words for w in name_words):
                suggestions.append(name)

    return suggestions
