import logging
from uuid import UUID, uuid4
from datetime import datetime
from typing import Iterable, List, Optional

from domain.models.candidate import Candidate
from domain.models.hackathon import Hackathon, Questionnaire
from domain.models.identity import Team, TeamMember
from domain.ports.repository import RepositoryPort
from domain.services.candidate_extractor import CandidateExtractor, normalize_role, parse_skills
from domain.services.partitioner import (
    DEFAULT_TEAM_SIZE,
    MIN_TEAM_SIZE,
    TeamDraft,
    normalize_team_size,
    partition,
)
from domain.services.team_bonus import team_score
from domain.exceptions import (
    TeamNotFound,
    ParticipantNotInTeam,
    ParticipantAlreadyAssigned,
    TeamHasNoGeneration,
    InvalidTeamName,
    ParticipantNotFound,
    HackathonNotFound,
    HackathonHasNoQuestionnaire,
)


class TeamService:
    def __init__(
        self,
        repository: RepositoryPort,
        default_team_size: int = DEFAULT_TEAM_SIZE,
        min_team_size: int = MIN_TEAM_SIZE,
    ):
        self.repository = repository
        self.default_team_size = default_team_size
        self.min_team_size = min_team_size
        self.logger = logging.getLogger(__name__)

    # =========================
    # Generation
    # =========================

    def generate(self, requested_team_size: Optional[int], hackathon_id: UUID) -> UUID:
        """
        Build a new generation of teams for the hackathon and replace the
        previous one. An empty candidate pool returns a fresh generation id
        without touching the store.
        """
        target_size = normalize_team_size(requested_team_size, self.default_team_size, self.min_team_size)

        with self.repository.transaction():
            hackathon = self.repository.get_hackathon_by_id(hackathon_id)
            if hackathon is None:
                raise HackathonNotFound(hackathon_id)
            questionnaire = self._require_questionnaire(hackathon)

            candidates = self._load_candidates(hackathon, questionnaire)
            generation_id = uuid4()
            if not candidates:
                self.logger.info(f"No candidates for hackathon {hackathon_id}; generation {generation_id} is empty")
                return generation_id

            drafts = partition(candidates, target_size)
            self.logger.info(
                f"Hackathon {hackathon_id}: {len(candidates)} candidates -> {len(drafts)} teams "
                f"(target size {target_size}, capacities {[d.capacity for d in drafts]})"
            )

            created_at = datetime.utcnow()
            teams = [
                self._team_from_draft(draft, hackathon_id, generation_id, created_at)
                for draft in drafts
            ]
            self.repository.replace_generation(hackathon_id, teams)

        self.logger.info(f"Stored generation {generation_id} for hackathon {hackathon_id}")
        return generation_id

    def _require_questionnaire(self, hackathon: Hackathon) -> Questionnaire:
        if hackathon.questionnaire_id is None:
            raise HackathonHasNoQuestionnaire(hackathon.id)
        questionnaire = self.repository.get_questionnaire_by_id(hackathon.questionnaire_id)
        if questionnaire is None:
            raise HackathonHasNoQuestionnaire(hackathon.id)
        return questionnaire

    def _load_candidates(self, hackathon: Hackathon, questionnaire: Questionnaire) -> List[Candidate]:
        extractor = CandidateExtractor(questionnaire)
        candidates: List[Candidate] = []
        for participant in self.repository.get_participants_by_ids(list(hackathon.participant_ids)):
            answer = self.repository.get_answer(questionnaire.id, participant.id)
            candidate = extractor.extract(participant, answer)
            if candidate is not None:
                candidates.append(candidate)
        return candidates

    @staticmethod
    def _team_from_draft(draft: TeamDraft, hackathon_id: UUID, generation_id: UUID, created_at: datetime) -> Team:
        team_id = uuid4()
        members = [
            TeamMember(
                id=uuid4(),
                team_id=team_id,
                generation_id=generation_id,
                participant_id=c.participant_id,
                role_snapshot=c.role,
                skills_snapshot=", ".join(sorted(c.skills)),
                motivation_snapshot=c.motivation,
                years_experience_snapshot=c.years_experience,
                position=position,
            )
            for position, c in enumerate(draft.members)
        ]
        return Team(
            id=team_id,
            name=draft.name,
            score=draft.score,
            generation_id=generation_id,
            hackathon_id=hackathon_id,
            created_at=created_at,
            members=members,
        )

    # =========================
    # Reads
    # =========================

    def list_teams(self, generation_id: Optional[UUID] = None) -> List[Team]:
        return self.repository.list_teams(generation_id)

    def list_teams_by_hackathon(self, hackathon_id: UUID) -> List[Team]:
        if self.repository.get_hackathon_by_id(hackathon_id) is None:
            raise HackathonNotFound(hackathon_id)
        return self.repository.list_teams_by_hackathon(hackathon_id)

    def get_team(self, team_id: UUID) -> Team:
        team = self.repository.get_team_by_id(team_id)
        if team is None:
            raise TeamNotFound(team_id)
        return team

    # =========================
    # Edits
    # =========================

    def rename_team(self, team_id: UUID, new_name: Optional[str]) -> Team:
        name = (new_name or "").strip()
        if not name:
            raise InvalidTeamName()

        with self.repository.transaction():
            self.get_team(team_id)
            self.repository.update_team(team_id, name=name)
            team = self.get_team(team_id)

        self.logger.info(f"Renamed team {team_id} to '{name}'")
        return team

    def add_members(self, team_id: UUID, participant_ids: Iterable[Optional[UUID]]) -> Team:
        """Add every participant or none of them."""
        with self.repository.transaction():
            team = self.get_team(team_id)
            generation_id = self._require_generation(team)

            ids = [pid for pid in participant_ids if pid is not None]
            if not ids:
                return team

            position = self._next_position(team)
            seen = set()
            for participant_id in ids:
                if self.repository.get_participant_by_id(participant_id) is None:
                    raise ParticipantNotFound(participant_id)
                if participant_id in seen or self.repository.find_membership(generation_id, participant_id):
                    raise ParticipantAlreadyAssigned(participant_id, generation_id)
                seen.add(participant_id)

                self.repository.add_membership(
                    TeamMember(
                        id=uuid4(),
                        team_id=team_id,
                        generation_id=generation_id,
                        participant_id=participant_id,
                        position=position,
                    )
                )
                position += 1

            self._recalculate_score(team_id)
            team = self.get_team(team_id)

        self.logger.info(f"Added {len(ids)} member(s) to team {team_id}")
        return team

    def remove_member(self, team_id: UUID, participant_id: UUID) -> Team:
        with self.repository.transaction():
            team = self.get_team(team_id)
            member = next((m for m in team.members if m.participant_id == participant_id), None)
            if member is None:
                raise ParticipantNotInTeam(team_id, participant_id)

            self.repository.remove_membership(member.id)
            self._recalculate_score(team_id)
            team = self.get_team(team_id)

        self.logger.info(f"Removed participant {participant_id} from team {team_id}")
        return team

    def move_member(self, participant_id: UUID, target_team_id: UUID) -> None:
        """
        Move the participant's membership of the target's generation onto the
        target team. Without such a membership a new one is created there.
        """
        with self.repository.transaction():
            target = self.get_team(target_team_id)
            generation_id = self._require_generation(target)

            membership = self.repository.find_membership(generation_id, participant_id)
            if membership is not None and membership.team_id == target_team_id:
                return

            position = self._next_position(target)
            if membership is not None:
                self.repository.move_membership(membership.id, target_team_id, position)
                self._recalculate_score(membership.team_id)
                self.logger.info(
                    f"Moved participant {participant_id} from team {membership.team_id} to team {target_team_id}"
                )
            else:
                if self.repository.get_participant_by_id(participant_id) is None:
                    raise ParticipantNotFound(participant_id)
                self.repository.add_membership(
                    TeamMember(
                        id=uuid4(),
                        team_id=target_team_id,
                        generation_id=generation_id,
                        participant_id=participant_id,
                        position=position,
                    )
                )
                self.logger.info(f"Participant {participant_id} had no team in generation {generation_id}; added to {target_team_id}")

            self._recalculate_score(target_team_id)

    def delete_team(self, team_id: UUID) -> None:
        with self.repository.transaction():
            self.get_team(team_id)
            self.repository.delete_team(team_id)
        self.logger.info(f"Deleted team {team_id}")

    # =========================
    # Helpers
    # =========================

    @staticmethod
    def _require_generation(team: Team) -> UUID:
        if team.generation_id is None:
            raise TeamHasNoGeneration(team.id)
        return team.generation_id

    @staticmethod
    def _next_position(team: Team) -> int:
        return max((m.position for m in team.members), default=-1) + 1

    @staticmethod
    def candidate_from_snapshot(member: TeamMember) -> Candidate:
        return Candidate(
            participant_id=member.participant_id,
            role=normalize_role(member.role_snapshot),
            skills=parse_skills(member.skills_snapshot),
            motivation=member.motivation_snapshot or 0,
            years_experience=member.years_experience_snapshot or 0,
        )

    def _recalculate_score(self, team_id: UUID) -> None:
        team = self.get_team(team_id)
        score = team_score([self.candidate_from_snapshot(m) for m in team.members])
        self.repository.update_team(team_id, score=score)
