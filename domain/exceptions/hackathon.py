from __future__ import annotations
from uuid import UUID
from domain.exceptions.base import NotFoundError, ConflictError

class HackathonNotFound(NotFoundError):
    def __init__(self, hackathon_id: UUID):
        super().__init__(f"Hackathon not found (id={hackathon_id})")

class HackathonHasNoQuestionnaire(ConflictError):
    def __init__(self, hackathon_id: UUID):
        super().__init__(
            f"Hackathon has no questionnaire (id={hackathon_id}). Cannot generate teams."
        )
