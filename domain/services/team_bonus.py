"""Whole-team diversity bonuses."""
from __future__ import annotations

from itertools import combinations
from typing import Sequence

from domain.models.candidate import Candidate
from domain.services.pair_scoring import pair_score

ROLE_COVERAGE_BONUS = 0.2
ROLE_COVERAGE_MIN = 3
SKILL_COVERAGE_BONUS = 0.1
SKILL_COVERAGE_MIN = 8


def team_bonus(members: Sequence[Candidate]) -> float:
    roles = {m.role for m in members if m.role is not None}
    skills = set()
    for m in members:
        skills |= m.skills

    bonus = 0.0
    if len(roles) >= ROLE_COVERAGE_MIN:
        bonus += ROLE_COVERAGE_BONUS
    if len(skills) >= SKILL_COVERAGE_MIN:
        bonus += SKILL_COVERAGE_BONUS
    return bonus


def team_score(members: Sequence[Candidate]) -> float:
    """Sum of every internal pair score plus the team bonus."""
    pairs = sum(pair_score(a, b) for a, b in combinations(members, 2))
    return pairs + team_bonus(members)
