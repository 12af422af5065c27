from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

@dataclass(frozen=True)
class Participant:
    id: UUID
    first_name: str
    last_name: str
    email: str

@dataclass(frozen=True)
class TeamMember:
    id: UUID
    team_id: UUID
    generation_id: UUID
    participant_id: UUID
    # Frozen at assignment time, never refreshed from later answers.
    role_snapshot: Optional[str] = None
    skills_snapshot: Optional[str] = None
    motivation_snapshot: Optional[int] = None
    years_experience_snapshot: Optional[int] = None
    position: int = 0
    first_name: Optional[str] = None
    last_name: Optional[str] = None

@dataclass(frozen=True)
class Team:
    id: UUID
    name: str
    score: float
    generation_id: Optional[UUID]
    hackathon_id: UUID
    created_at: datetime
    members: List[TeamMember] = field(default_factory=list)

    def participant_ids(self) -> List[UUID]:
        return [m.participant_id for m in self.members]
