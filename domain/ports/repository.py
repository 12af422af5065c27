from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional
from uuid import UUID

from domain.models.hackathon import Hackathon, Questionnaire, QuestionnaireAnswer
from domain.models.identity import Team, TeamMember, Participant

class RepositoryPort(ABC):
    # =========================
    # Unit of work
    # =========================

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """
        Every write below happens inside this context: it commits when the
        block exits normally and rolls back everything on any exception.
        """
        pass

    # =========================
    # Hackathons & questionnaires (read-only collaborators)
    # =========================

    @abstractmethod
    def get_hackathon_by_id(self, hackathon_id: UUID) -> Optional[Hackathon]:
        pass

    @abstractmethod
    def get_questionnaire_by_id(self, questionnaire_id: UUID) -> Optional[Questionnaire]:
        pass

    @abstractmethod
    def get_answer(self, questionnaire_id: UUID, participant_id: UUID) -> Optional[QuestionnaireAnswer]:
        pass

    # =========================
    # Participants (read-only collaborators)
    # =========================

    @abstractmethod
    def get_participant_by_id(self, participant_id: UUID) -> Optional[Participant]:
        pass

    @abstractmethod
    def get_participants_by_ids(self, participant_ids: List[UUID]) -> List[Participant]:
        pass

    # =========================
    # Generations
    # =========================

    @abstractmethod
    def replace_generation(self, hackathon_id: UUID, teams: List[Team]) -> None:
        """Delete every team (and member) of the hackathon, then insert ``teams``."""
        pass

    @abstractmethod
    def list_teams(self, generation_id: Optional[UUID] = None) -> List[Team]:
        """Teams of one generation by score desc, or every team when generation_id is None."""
        pass

    @abstractmethod
    def list_teams_by_hackathon(self, hackathon_id: UUID) -> List[Team]:
        pass

    # =========================
    # Teams
    # =========================

    @abstractmethod
    def get_team_by_id(self, team_id: UUID) -> Optional[Team]:
        pass

    @abstractmethod
    def update_team(self, team_id: UUID, *, name: Optional[str] = None, score: Optional[float] = None) -> None:
        pass

    @abstractmethod
    def delete_team(self, team_id: UUID) -> None:
        pass

    # =========================
    # Memberships
    # =========================

    @abstractmethod
    def find_membership(self, generation_id: UUID, participant_id: UUID) -> Optional[TeamMember]:
        pass

    @abstractmethod
    def add_membership(self, member: TeamMember) -> None:
        pass

    @abstractmethod
    def remove_membership(self, member_id: UUID) -> None:
        pass

    @abstractmethod
    def move_membership(self, member_id: UUID, target_team_id: UUID, position: int) -> None:
        """Re-point an existing membership row; its id and snapshots are kept."""
        pass
