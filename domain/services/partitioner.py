"""
Greedy partitioning of candidates into balanced teams.

Teams are seeded with the strongest candidates (motivation + experience),
then every remaining candidate joins the non-full team where it adds the
most score. This is a heuristic: it is deterministic for a given input order
and fast enough for pools of a few hundred, not globally optimal.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from domain.models.candidate import Candidate
from domain.services.pair_scoring import pair_score
from domain.services.team_bonus import team_bonus, team_score

DEFAULT_TEAM_SIZE = 4
MIN_TEAM_SIZE = 3


def normalize_team_size(
    requested: Optional[int],
    default: int = DEFAULT_TEAM_SIZE,
    minimum: int = MIN_TEAM_SIZE,
) -> int:
    if requested is None or requested < minimum:
        return default
    return requested


@dataclass(frozen=True)
class TeamLayout:
    number_of_teams: int
    capacities: List[int]

    @classmethod
    def compute(cls, total_candidates: int, target_team_size: int) -> "TeamLayout":
        teams = max(1, math.ceil(total_candidates / target_team_size))
        base, extra = divmod(total_candidates, teams)
        capacities = [base + 1 if i < extra else base for i in range(teams)]
        return cls(number_of_teams=teams, capacities=capacities)


@dataclass
class TeamDraft:
    name: str
    capacity: int
    members: List[Candidate] = field(default_factory=list)
    score: float = 0.0

    def is_full(self) -> bool:
        return len(self.members) >= self.capacity

    def add(self, candidate: Candidate) -> None:
        self.members.append(candidate)

    def marginal_gain(self, candidate: Candidate) -> float:
        pair_sum = sum(pair_score(m, candidate) for m in self.members)
        before = team_bonus(self.members)
        after = team_bonus(self.members + [candidate])
        return pair_sum + (after - before)

    def recompute_score(self) -> float:
        self.score = team_score(self.members)
        return self.score


def sort_by_strength(candidates: Sequence[Candidate]) -> List[Candidate]:
    return sorted(candidates, key=lambda c: c.strength, reverse=True)


def _best_team(drafts: Sequence[TeamDraft], candidate: Candidate) -> Optional[TeamDraft]:
    best = None
    best_gain = -math.inf
    for draft in drafts:
        gain = draft.marginal_gain(candidate)
        # strict comparison keeps the first team on ties
        if gain > best_gain:
            best_gain = gain
            best = draft
    return best


def partition(candidates: Sequence[Candidate], target_team_size: int) -> List[TeamDraft]:
    """Split candidates into balanced teams; returns [] for an empty pool."""
    if not candidates:
        return []

    ordered = sort_by_strength(candidates)
    layout = TeamLayout.compute(len(ordered), target_team_size)

    drafts = [
        TeamDraft(name=f"Team {i + 1}", capacity=capacity)
        for i, capacity in enumerate(layout.capacities)
    ]
    for draft, seed in zip(drafts, ordered):
        draft.add(seed)

    for candidate in ordered[len(drafts):]:
        open_teams = [d for d in drafts if not d.is_full()]
        target = _best_team(open_teams, candidate) or _best_team(drafts, candidate)
        target.add(candidate)

    for draft in drafts:
        draft.recompute_score()
    return drafts
