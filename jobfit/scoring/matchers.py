"""Skill matching utilities for fit analysis."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Literal

from jobfit.scoring.config import SimilarityThresholds

MatchQuality = Literal["strong", "moderate", "weak"]

# Jaro-Winkler overrates short tokens ("sql" vs "sqs"), so they need more.
SHORT_TOKEN_LENGTH = 4
SHORT_TOKEN_THRESHOLDS = SimilarityThresholds(strong=0.95, moderate=0.90)

WINKLER_PREFIX_WEIGHT = 0.1
WINKLER_MAX_PREFIX = 4
WINKLER_BOOST_THRESHOLD = 0.7

_DEFAULT_THRESHOLDS = SimilarityThresholds()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching one target skill against known skill tokens."""

    found: bool
    match_quality: MatchQuality
    matched_term: str | None = None


_NO_MATCH = MatchResult(found=False, match_quality="weak")


def normalize_skill(skill: str) -> str:
    """Normalize a skill token for comparison (trim + lower-case)."""
    return skill.strip().lower()


def jaro_winkler(s1: str, s2: str) -> float:
    """Return the Jaro-Winkler similarity of two strings, in [0, 1]."""
    if not s1 or not s2:
        return 0.0
    if s1 == s2:
        return 1.0

    radius = max(len(s1), len(s2)) // 2 - 1
    s1_matched = [False] * len(s1)
    s2_matched = [False] * len(s2)

    matches = 0
    for i, ch in enumerate(s1):
        low = i - radius if i >= radius else 0
        high = min(i + radius, len(s2) - 1)
        for j in range(low, high + 1):
            if not s2_matched[j] and s2[j] == ch:
                s1_matched[i] = s2_matched[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i, ch in enumerate(s1):
        if not s1_matched[i]:
            continue
        while not s2_matched[k]:
            k += 1
        if ch != s2[k]:
            transpositions += 1
        k += 1

    jaro = (
        matches / len(s1)
        + matches / len(s2)
        + (matches - transpositions / 2) / matches
    ) / 3

    if jaro <= WINKLER_BOOST_THRESHOLD:
        return jaro

    prefix = 0
    limit = min(WINKLER_MAX_PREFIX, len(s1), len(s2))
    while prefix < limit and s1[prefix] == s2[prefix]:
        prefix += 1
    return jaro + prefix * WINKLER_PREFIX_WEIGHT * (1 - jaro)


def contains_word(text: str, word: str) -> bool:
    """Return True if `word` occurs in `text` as a whole word.

    A word boundary is the start/end of the string or any character outside
    [a-z0-9], so "c#" is found in ".net / c#" but "go" is not found in
    "google".
    """
    if not word:
        return False
    pattern = rf"(?:^|[^a-z0-9]){re.escape(word)}(?:$|[^a-z0-9])"
    return re.search(pattern, text, flags=re.IGNORECASE) is not None


def find_best_match(
    target: str,
    available: Iterable[str],
    thresholds: SimilarityThresholds | None = None,
) -> MatchResult:
    """Classify `target` against known (already normalized) skill tokens.

    Checks run in priority order and the first hit wins:

    1. exact match after normalization (strong);
    2. whole-word containment, per known token: the target inside the token
       is strong ("c#" in ".net / c#"), the token inside the target is
       moderate ("aws" in "aws lambda");
    3. best Jaro-Winkler similarity, with stricter thresholds for targets of
       four characters or fewer.
    """
    normalized = normalize_skill(target)
    if not normalized:
        return _NO_MATCH

    known = list(available)
    if normalized in known:
        return MatchResult(found=True, match_quality="strong", matched_term=normalized)

    for skill in known:
        if contains_word(skill, normalized):
            return MatchResult(found=True, match_quality="strong", matched_term=skill)
        if contains_word(normalized, skill):
            return MatchResult(found=True, match_quality="moderate", matched_term=skill)

    best_term: str | None = None
    best_score = 0.0
    for skill in known:
        score = jaro_winkler(normalized, skill)
        if score > best_score:
            best_score = score
            best_term = skill

    if len(normalized) <= SHORT_TOKEN_LENGTH:
        limits = SHORT_TOKEN_THRESHOLDS
    else:
        limits = thresholds or _DEFAULT_THRESHOLDS

    if best_score > limits.strong:
        return MatchResult(found=True, match_quality="strong", matched_term=best_term)
    if best_score >= limits.moderate:
        return MatchResult(found=True, match_quality="moderate", matched_term=best_term)
    return _NO_MATCH
