from uuid import UUID
from domain.exceptions.base import NotFoundError


class ParticipantNotFound(NotFoundError):
    def __init__(self, participant_id: UUID | None = None):
        msg = "Participant not found"
        if participant_id:
            msg += f" (id={participant_id})"
        super().__init__(msg)
