"""Pytest configuration and fixtures."""
import os
import uuid
from typing import Any, Optional

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep the application away from any real database during tests
os.environ["DATABASE_URL"] = "sqlite://"

from infrastructure.database import build_engine
from infrastructure.persistence.tables import (
    Base,
    HackathonTable,
    ParticipantTable,
    QuestionnaireTable,
    QuestionnaireAnswerTable,
    hackathon_participants,
)
from infrastructure.adapters.repository.sqlalchemy_repository import SqlAlchemyRepository
from domain.services.team_service import TeamService


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    db = Session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def repository(session):
    return SqlAlchemyRepository(session)


@pytest.fixture()
def service(repository):
    return TeamService(repository)


class Seeder:
    """Writes collaborator rows (hackathons, participants, answers) straight to the tables."""

    def __init__(self, session):
        self.session = session

    def questionnaire(self, source: str = "IMPORTED", questions: Optional[dict] = None) -> uuid.UUID:
        q = QuestionnaireTable(id=uuid.uuid4(), source=source, questions=questions)
        self.session.add(q)
        self.session.commit()
        return q.id

    def hackathon(self, questionnaire_id: Optional[uuid.UUID] = None, name: str = "Hack") -> uuid.UUID:
        h = HackathonTable(id=uuid.uuid4(), name=name, questionnaire_id=questionnaire_id)
        self.session.add(h)
        self.session.commit()
        return h.id

    def participant(self, first_name: str = "Ada", last_name: str = "Lovelace") -> uuid.UUID:
        pid = uuid.uuid4()
        self.session.add(
            ParticipantTable(id=pid, first_name=first_name, last_name=last_name, email=f"{pid}@example.com")
        )
        self.session.commit()
        return pid

    def enroll(
        self,
        hackathon_id: uuid.UUID,
        questionnaire_id: Optional[uuid.UUID],
        data: Any = None,
        consent: bool = True,
        first_name: str = "Ada",
        last_name: str = "Lovelace",
    ) -> uuid.UUID:
        """Register a new participant; ``data=None`` leaves them without an answer."""
        pid = self.participant(first_name, last_name)
        self.session.execute(
            hackathon_participants.insert().values(hackathon_id=hackathon_id, participant_id=pid)
        )
        if data is not None and questionnaire_id is not None:
            self.session.add(
                QuestionnaireAnswerTable(
                    id=uuid.uuid4(),
                    questionnaire_id=questionnaire_id,
                    participant_id=pid,
                    consent=consent,
                    data=data,
                )
            )
        self.session.commit()
        return pid


@pytest.fixture()
def seed(session):
    return Seeder(session)


def answer(role="backend", skills="python, sql", motivation=3, years_experience=2, **extra):
    data = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "role": role,
        "skills": skills,
        "motivation": motivation,
        "years_experience": years_experience,
    }
    data.update(extra)
    return data


ROLES = ["backend", "frontend", "design", "data", "product"]
SKILLS = ["python", "sql", "react", "figma", "docker", "go", "ml", "css", "rust", "aws"]


@pytest.fixture()
def hackathon_with_pool(seed):
    """A hackathon whose questionnaire has been answered by ``n`` participants."""

    def build(n: int):
        qid = seed.questionnaire()
        hid = seed.hackathon(qid)
        pids = []
        for i in range(n):
            data = answer(
                role=ROLES[i % len(ROLES)],
                skills=", ".join(SKILLS[i % len(SKILLS):i % len(SKILLS) + 3]),
                motivation=(i * 3) % 6,
                years_experience=(i * 7) % 11,
            )
            pids.append(seed.enroll(hid, qid, data, first_name=f"P{i}"))
        return hid, pids

    return build
