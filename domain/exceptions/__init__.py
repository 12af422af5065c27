from .base import DomainError, NotFoundError, ConflictError, InvalidInputError

from .team import (
    TeamNotFound,
    ParticipantNotInTeam,
    ParticipantAlreadyAssigned,
    TeamHasNoGeneration,
    InvalidTeamName,
)

from .participant import (
    ParticipantNotFound,
)

from .hackathon import (
    HackathonNotFound,
    HackathonHasNoQuestionnaire,
)

__all__ = [
    "DomainError",
    "NotFoundError",
    "ConflictError",
    "InvalidInputError",
    "TeamNotFound",
    "ParticipantNotInTeam",
    "ParticipantAlreadyAssigned",
    "TeamHasNoGeneration",
    "InvalidTeamName",
    "ParticipantNotFound",
    "HackathonNotFound",
    "HackathonHasNoQuestionnaire",
]
