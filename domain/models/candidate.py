from dataclasses import dataclass, field
from typing import FrozenSet, Optional
from uuid import UUID


@dataclass(frozen=True)
class Candidate:
    """Scoring-ready view of one participant, rebuilt on every generation run."""

    participant_id: UUID
    role: Optional[str] = None
    skills: FrozenSet[str] = field(default_factory=frozenset)
    motivation: int = 0
    years_experience: int = 0
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @property
    def strength(self) -> int:
        return self.motivation + self.years_experience
