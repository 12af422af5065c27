from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional
from uuid import UUID


class QuestionnaireSource(str, Enum):
    INTERNAL = "INTERNAL"
    IMPORTED = "IMPORTED"


@dataclass(frozen=True)
class Questionnaire:
    id: UUID
    source: QuestionnaireSource = QuestionnaireSource.IMPORTED
    # {"questions": [{"key": ..., "options": [{"id": ..., "label": ...}]}]}
    questions: Optional[dict] = None


@dataclass(frozen=True)
class Hackathon:
    id: UUID
    name: str
    questionnaire_id: Optional[UUID]
    participant_ids: List[UUID] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionnaireAnswer:
    questionnaire_id: UUID
    participant_id: UUID
    data: Any
    consent: bool = True
