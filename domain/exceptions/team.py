from uuid import UUID
from domain.exceptions.base import NotFoundError, ConflictError, InvalidInputError


class TeamNotFound(NotFoundError):
    def __init__(self, team_id: UUID):
        super().__init__(f"Team with id '{team_id}' not found")


class ParticipantNotInTeam(NotFoundError):
    def __init__(self, team_id: UUID, participant_id: UUID):
        super().__init__(
            f"Participant '{participant_id}' is not a member of team '{team_id}'"
        )


class ParticipantAlreadyAssigned(ConflictError):
    def __init__(self, participant_id: UUID, generation_id: UUID):
        super().__init__(
            f"Participant '{participant_id}' is already in a team for generation '{generation_id}'"
        )


class TeamHasNoGeneration(ConflictError):
    def __init__(self, team_id: UUID):
        super().__init__(f"Team with id '{team_id}' has no generation id")


class InvalidTeamName(InvalidInputError):
    def __init__(self):
        super().__init__("Team name must not be blank")
