import uuid

import pytest

from domain.models.candidate import Candidate
from domain.services.partitioner import (
    TeamDraft,
    TeamLayout,
    normalize_team_size,
    partition,
    sort_by_strength,
)
from domain.services.pair_scoring import pair_score
from domain.services.team_bonus import team_score


def _pool(n: int):
    roles = ["backend", "frontend", "design", None]
    skills = ["python", "sql", "react", "figma", "docker", "go"]
    return [
        Candidate(
            participant_id=uuid.uuid4(),
            role=roles[i % len(roles)],
            skills=frozenset(skills[i % len(skills):i % len(skills) + 2]),
            motivation=(i * 5) % 6,
            years_experience=(i * 3) % 9,
        )
        for i in range(n)
    ]


@pytest.mark.parametrize(
    "requested, expected",
    [(None, 4), (0, 4), (2, 4), (3, 3), (5, 5), (12, 12)],
)
def test_normalize_team_size(requested, expected) -> None:
    assert normalize_team_size(requested) == expected


def test_layout_three_candidates_size_three() -> None:
    layout = TeamLayout.compute(3, 3)
    assert layout.number_of_teams == 1
    assert layout.capacities == [3]


def test_layout_fifteen_candidates_size_four() -> None:
    layout = TeamLayout.compute(15, 4)
    assert layout.number_of_teams == 4
    assert layout.capacities == [4, 4, 4, 3]


def test_layout_is_always_balanced() -> None:
    for total in range(1, 80):
        for size in range(3, 9):
            caps = TeamLayout.compute(total, size).capacities
            assert sum(caps) == total
            assert max(caps) - min(caps) <= 1
            assert caps == sorted(caps, reverse=True)


def test_layout_with_fewer_candidates_than_team_size() -> None:
    assert TeamLayout.compute(2, 4).capacities == [2]


def test_partition_empty_pool() -> None:
    assert partition([], 4) == []


def test_partition_scenarios() -> None:
    drafts = partition(_pool(3), 3)
    assert len(drafts) == 1
    assert len(drafts[0].members) == 3

    drafts = partition(_pool(15), 4)
    assert [len(d.members) for d in drafts] == [4, 4, 4, 3]
    assert [d.capacity for d in drafts] == [4, 4, 4, 3]
    assert [d.name for d in drafts] == ["Team 1", "Team 2", "Team 3", "Team 4"]


def test_partition_places_every_candidate_once() -> None:
    pool = _pool(23)
    drafts = partition(pool, 5)

    placed = [c.participant_id for d in drafts for c in d.members]
    assert sorted(placed) == sorted(c.participant_id for c in pool)
    assert len(placed) == len(set(placed))


def test_partition_seeds_with_strongest_candidates() -> None:
    pool = _pool(12)
    drafts = partition(pool, 4)
    strongest = sort_by_strength(pool)

    assert [d.members[0] for d in drafts] == strongest[: len(drafts)]


def test_partition_scores_match_final_membership() -> None:
    for draft in partition(_pool(17), 4):
        assert draft.score == pytest.approx(team_score(draft.members))


def test_partition_is_deterministic_for_identical_input() -> None:
    pool = _pool(19)
    first = partition(pool, 4)
    second = partition(list(pool), 4)

    assert [[c.participant_id for c in d.members] for d in first] == \
           [[c.participant_id for c in d.members] for d in second]
    assert [d.capacity for d in first] == [d.capacity for d in second]


def test_ties_go_to_the_first_team() -> None:
    twins = [Candidate(participant_id=uuid.uuid4()) for _ in range(4)]

    drafts = partition(twins, 3)

    # two teams of two; the third twin ties and joins Team 1, the fourth fills Team 2
    assert [c.participant_id for c in drafts[0].members] == [twins[0].participant_id, twins[2].participant_id]
    assert [c.participant_id for c in drafts[1].members] == [twins[1].participant_id, twins[3].participant_id]


def test_candidate_prefers_team_with_higher_marginal_gain() -> None:
    a = Candidate(participant_id=uuid.uuid4(), role="backend", skills=frozenset({"python"}), motivation=5, years_experience=5)
    b = Candidate(participant_id=uuid.uuid4(), role="design", skills=frozenset({"figma"}), motivation=1, years_experience=0)
    like_b = Candidate(participant_id=uuid.uuid4(), role="design", skills=frozenset({"figma"}), motivation=1, years_experience=0)

    team_a = TeamDraft(name="A", capacity=2, members=[a])
    team_b = TeamDraft(name="B", capacity=2, members=[b])

    assert team_b.marginal_gain(like_b) > team_a.marginal_gain(like_b)


def test_marginal_gain_includes_bonus_delta() -> None:
    members = [
        Candidate(participant_id=uuid.uuid4(), role="backend"),
        Candidate(participant_id=uuid.uuid4(), role="frontend"),
    ]
    draft = TeamDraft(name="T", capacity=3, members=list(members))
    newcomer = Candidate(participant_id=uuid.uuid4(), role="design")

    expected = sum(pair_score(m, newcomer) for m in members) + 0.2

    assert draft.marginal_gain(newcomer) == pytest.approx(expected)
    # hypothetical add leaves the draft untouched
    assert len(draft.members) == 2
