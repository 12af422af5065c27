from sqlalchemy import Column, String, Float, Boolean, Integer, ForeignKey, DateTime, Table, Text, JSON, Uuid, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base
import uuid
from datetime import datetime

Base = declarative_base()

JSONType = JSON().with_variant(JSONB(), "postgresql")

# Hackathon <-> Participants (inscriptions)
hackathon_participants = Table(
    "hackathon_participants",
    Base.metadata,
    Column("hackathon_id", Uuid, ForeignKey("hackathon.id", ondelete="CASCADE"), primary_key=True),
    Column("participant_id", Uuid, ForeignKey("participants.id", ondelete="CASCADE"), primary_key=True),
)

# --- COLLABORATEURS (lecture seule pour le moteur) ---

class QuestionnaireTable(Base):
    __tablename__ = "questionnaires"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    source = Column(String, nullable=False, default="IMPORTED")
    questions = Column(JSONType)
    created_at = Column(DateTime, default=datetime.utcnow)

class HackathonTable(Base):
    __tablename__ = "hackathon"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    questionnaire_id = Column(Uuid, ForeignKey("questionnaires.id", ondelete="SET NULL"))
    start_date = Column(DateTime)
    end_date = Column(DateTime)
    created_at = Column(DateTime, default=datetime.utcnow)

class ParticipantTable(Base):
    __tablename__ = "participants"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    last_name = Column(Text, nullable=False)
    first_name = Column(Text, nullable=False)
    email = Column(Text, unique=True, nullable=False)

class QuestionnaireAnswerTable(Base):
    __tablename__ = "questionnaire_answers"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    questionnaire_id = Column(Uuid, ForeignKey("questionnaires.id", ondelete="CASCADE"), nullable=False)
    participant_id = Column(Uuid, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    consent = Column(Boolean, nullable=False, default=True)
    data = Column(JSONType)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_answers_questionnaire_participant", "questionnaire_id", "participant_id", unique=True),
    )

# --- EQUIPES ---

class TeamTable(Base):
    __tablename__ = "teams"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    hackathon_id = Column(Uuid, ForeignKey("hackathon.id", ondelete="CASCADE"), nullable=False, index=True)
    generation_id = Column(Uuid, index=True)
    name = Column(Text, nullable=False)
    score = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=datetime.utcnow)

class TeamMemberTable(Base):
    __tablename__ = "team_members"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    team_id = Column(Uuid, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    # Copie de teams.generation_id : unicité participant/génération vérifiée par le moteur
    generation_id = Column(Uuid, nullable=False)
    participant_id = Column(Uuid, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    role_snapshot = Column(Text)
    skills_snapshot = Column(Text)
    motivation_snapshot = Column(Integer)
    years_experience_snapshot = Column(Integer)

    __table_args__ = (
        Index("ix_team_members_generation_participant", "generation_id", "participant_id"),
    )
