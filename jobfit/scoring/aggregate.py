"""Combine partial scores into the final percentage and verdict."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Protocol

from jobfit.scoring.config import ConclusionRules
from jobfit.scoring.models import SkillMatch


class PartialScore(Protocol):
    total_score: float
    max_possible: float


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward (12.5 -> 13)."""
    return math.floor(value + 0.5)


def aggregate_score(partials: Iterable[PartialScore]) -> int:
    """Return the overall score as an integer percentage in [0, 100]."""
    numerator = 0.0
    denominator = 0.0
    for partial in partials:
        numerator += partial.total_score
        denominator += partial.max_possible

    percent = round_half_up(numerator / max(denominator, 1.0) * 100)
    return max(0, min(100, percent))


def calculate_coverage(matches: Sequence[SkillMatch]) -> int:
    """Percentage of requested skills that were found (0 for none requested)."""
    if not matches:
        return 0
    found = sum(1 for m in matches if m.found)
    return round_half_up(found / len(matches) * 100)


def extract_strengths(
    matches: Iterable[SkillMatch], expert_weight: float
) -> list[str]:
    strengths: list[str] = []
    for match in matches:
        if not match.found:
            continue
        if match.weight >= expert_weight:
            strengths.append(f"{match.skill} (Expert)")
        else:
            strengths.append(match.skill)
    return strengths


def extract_gaps(matches: Iterable[SkillMatch]) -> list[str]:
    return [m.skill for m in matches if not m.found]


def select_conclusion(score: int, req_coverage: int, rules: ConclusionRules) -> str:
    """Pick the verdict: overrides in order, then score tiers, then the default."""
    metrics = {"score": score, "req_coverage": req_coverage}

    for override in rules.overrides:
        if metrics[override.metric] >= override.threshold:
            return override.message

    for tier in rules.tiers:
        if score >= tier.threshold:
            return tier.message

    return rules.default_message
