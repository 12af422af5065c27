"""Symmetric affinity between two candidates."""
from __future__ import annotations

from typing import AbstractSet

from domain.models.candidate import Candidate

MOTIVATION_WEIGHT = 0.35
SKILL_WEIGHT = 0.35
ROLE_WEIGHT = 0.15
EXPERIENCE_WEIGHT = 0.15

# Applied before ROLE_WEIGHT, so distinct roles contribute 0.15 * 0.15.
ROLE_DIVERSITY_BONUS = 0.15
MAX_MOTIVATION_GAP = 4
MIN_EXPERIENCE_RANGE = 10


def jaccard(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    if not a and not b:
        return 0.0
    inter = len(a & b)
    union = len(a) + len(b) - inter
    return inter / union if union else 0.0


def motivation_similarity(a: Candidate, b: Candidate) -> float:
    gap = min(MAX_MOTIVATION_GAP, abs(a.motivation - b.motivation))
    return 1.0 - gap / MAX_MOTIVATION_GAP


def role_bonus(a: Candidate, b: Candidate) -> float:
    if a.role is not None and b.role is not None and a.role != b.role:
        return ROLE_DIVERSITY_BONUS
    return 0.0


def experience_similarity(a: Candidate, b: Candidate) -> float:
    gap = abs(a.years_experience - b.years_experience)
    return 1.0 - gap / max(MIN_EXPERIENCE_RANGE, gap)


def pair_score(a: Candidate, b: Candidate) -> float:
    return (
        MOTIVATION_WEIGHT * motivation_similarity(a, b)
        + SKILL_WEIGHT * jaccard(a.skills, b.skills)
        + ROLE_WEIGHT * role_bonus(a, b)
        + EXPERIENCE_WEIGHT * experience_similarity(a, b)
    )
