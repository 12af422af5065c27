from __future__ import annotations

from collections import defaultdict
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.ports.repository import RepositoryPort
from domain.models.hackathon import Hackathon, Questionnaire, QuestionnaireAnswer, QuestionnaireSource
from domain.models.identity import Team, TeamMember, Participant

from infrastructure.persistence.tables import (
    HackathonTable,
    ParticipantTable,
    QuestionnaireTable,
    QuestionnaireAnswerTable,
    TeamTable,
    TeamMemberTable,
    hackathon_participants,  # <- Table() d'association
)


class SqlAlchemyRepository(RepositoryPort):
    def __init__(self, session: Session):
        self.session = session

    # =========================
    # Unit of work
    # =========================

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        try:
            yield self.session
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    # =========================
    # Hackathons & questionnaires
    # =========================

    def get_hackathon_by_id(self, hackathon_id: UUID) -> Optional[Hackathon]:
        h = self.session.query(HackathonTable).filter_by(id=hackathon_id).first()
        if not h:
            return None

        rows = (
            self.session.query(hackathon_participants.c.participant_id)
            .filter(hackathon_participants.c.hackathon_id == hackathon_id)
            .order_by(hackathon_participants.c.participant_id)
            .all()
        )
        return Hackathon(
            id=h.id,
            name=h.name,
            questionnaire_id=h.questionnaire_id,
            participant_ids=[r.participant_id for r in rows],
        )

    def get_questionnaire_by_id(self, questionnaire_id: UUID) -> Optional[Questionnaire]:
        q = self.session.query(QuestionnaireTable).filter_by(id=questionnaire_id).first()
        if not q:
            return None
        return Questionnaire(
            id=q.id,
            source=QuestionnaireSource(q.source or QuestionnaireSource.IMPORTED.value),
            questions=q.questions,
        )

    def get_answer(self, questionnaire_id: UUID, participant_id: UUID) -> Optional[QuestionnaireAnswer]:
        a = (
            self.session.query(QuestionnaireAnswerTable)
            .filter_by(questionnaire_id=questionnaire_id, participant_id=participant_id)
            .first()
        )
        if not a:
            return None
        return QuestionnaireAnswer(
            questionnaire_id=a.questionnaire_id,
            participant_id=a.participant_id,
            data=a.data,
            consent=bool(a.consent),
        )

    # =========================
    # Participants
    # =========================

    def get_participant_by_id(self, participant_id: UUID) -> Optional[Participant]:
        p = self.session.query(ParticipantTable).filter_by(id=participant_id).first()
        return self._map_to_participant(p) if p else None

    def get_participants_by_ids(self, participant_ids: List[UUID]) -> List[Participant]:
        if not participant_ids:
            return []
        rows = self.session.query(ParticipantTable).filter(ParticipantTable.id.in_(participant_ids)).all()
        by_id = {p.id: p for p in rows}
        # keep the caller's order
        return [self._map_to_participant(by_id[pid]) for pid in participant_ids if pid in by_id]

    # =========================
    # Generations
    # =========================

    def replace_generation(self, hackathon_id: UUID, teams: List[Team]) -> None:
        old_team_ids = select(TeamTable.id).where(TeamTable.hackathon_id == hackathon_id)
        self.session.query(TeamMemberTable).filter(
            TeamMemberTable.team_id.in_(old_team_ids)
        ).delete(synchronize_session=False)
        self.session.query(TeamTable).filter_by(hackathon_id=hackathon_id).delete(synchronize_session=False)
        self.session.flush()

        for team in teams:
            self.session.add(
                TeamTable(
                    id=team.id,
                    hackathon_id=hackathon_id,
                    generation_id=team.generation_id,
                    name=team.name,
                    score=team.score,
                    created_at=team.created_at,
                )
            )
        self.session.flush()

        for team in teams:
            for m in team.members:
                self.session.add(self._map_to_member_row(m))
        self.session.flush()

    def list_teams(self, generation_id: Optional[UUID] = None) -> List[Team]:
        q = self.session.query(TeamTable)
        if generation_id is None:
            q = q.order_by(TeamTable.created_at, TeamTable.name)
        else:
            q = q.filter_by(generation_id=generation_id).order_by(TeamTable.score.desc(), TeamTable.name)
        return self._map_to_teams(q.all())

    def list_teams_by_hackathon(self, hackathon_id: UUID) -> List[Team]:
        rows = self.session.query(TeamTable).filter_by(hackathon_id=hackathon_id).order_by(TeamTable.name).all()
        return self._map_to_teams(rows)

    # =========================
    # Teams
    # =========================

    def get_team_by_id(self, team_id: UUID) -> Optional[Team]:
        t = self.session.query(TeamTable).filter_by(id=team_id).first()
        if not t:
            return None
        return self._map_to_teams([t])[0]

    def update_team(self, team_id: UUID, *, name: Optional[str] = None, score: Optional[float] = None) -> None:
        values = {}
        if name is not None:
            values["name"] = name
        if score is not None:
            values["score"] = score
        if not values:
            return
        self.session.query(TeamTable).filter_by(id=team_id).update(values, synchronize_session="fetch")
        self.session.flush()

    def delete_team(self, team_id: UUID) -> None:
        self.session.query(TeamMemberTable).filter_by(team_id=team_id).delete(synchronize_session=False)
        self.session.query(TeamTable).filter_by(id=team_id).delete(synchronize_session=False)
        self.session.flush()

    # =========================
    # Memberships
    # =========================

    def find_membership(self, generation_id: UUID, participant_id: UUID) -> Optional[TeamMember]:
        m = (
            self.session.query(TeamMemberTable)
            .filter_by(generation_id=generation_id, participant_id=participant_id)
            .first()
        )
        return self._map_to_member(m) if m else None

    def add_membership(self, member: TeamMember) -> None:
        self.session.add(self._map_to_member_row(member))
        self.session.flush()

    def remove_membership(self, member_id: UUID) -> None:
        self.session.query(TeamMemberTable).filter_by(id=member_id).delete(synchronize_session=False)
        self.session.flush()

    def move_membership(self, member_id: UUID, target_team_id: UUID, position: int) -> None:
        self.session.query(TeamMemberTable).filter_by(id=member_id).update(
            {"team_id": target_team_id, "position": position},
            synchronize_session="fetch",
        )
        self.session.flush()

    # =========================
    # Private helpers / mappers
    # =========================

    def _map_to_teams(self, rows: List[TeamTable]) -> List[Team]:
        members = self._get_members_by_team([t.id for t in rows])
        return [
            Team(
                id=t.id,
                name=t.name,
                score=float(t.score or 0.0),
                generation_id=t.generation_id,
                hackathon_id=t.hackathon_id,
                created_at=t.created_at,
                members=members.get(t.id, []),
            )
            for t in rows
        ]

    def _get_members_by_team(self, team_ids: List[UUID]) -> Dict[UUID, List[TeamMember]]:
        if not team_ids:
            return {}
        rows = (
            self.session.query(TeamMemberTable, ParticipantTable.first_name, ParticipantTable.last_name)
            .outerjoin(ParticipantTable, ParticipantTable.id == TeamMemberTable.participant_id)
            .filter(TeamMemberTable.team_id.in_(team_ids))
            .order_by(TeamMemberTable.team_id, TeamMemberTable.position, TeamMemberTable.id)
            .all()
        )
        out: Dict[UUID, List[TeamMember]] = defaultdict(list)
        for m, first_name, last_name in rows:
            out[m.team_id].append(self._map_to_member(m, first_name, last_name))
        return out

    @staticmethod
    def _map_to_member(m: TeamMemberTable, first_name: Optional[str] = None, last_name: Optional[str] = None) -> TeamMember:
        return TeamMember(
            id=m.id,
            team_id=m.team_id,
            generation_id=m.generation_id,
            participant_id=m.participant_id,
            role_snapshot=m.role_snapshot,
            skills_snapshot=m.skills_snapshot,
            motivation_snapshot=m.motivation_snapshot,
            years_experience_snapshot=m.years_experience_snapshot,
            position=m.position or 0,
            first_name=first_name,
            last_name=last_name,
        )

    @staticmethod
    def _map_to_member_row(m: TeamMember) -> TeamMemberTable:
        return TeamMemberTable(
            id=m.id,
            team_id=m.team_id,
            generation_id=m.generation_id,
            participant_id=m.participant_id,
            position=m.position,
            role_snapshot=m.role_snapshot,
            skills_snapshot=m.skills_snapshot,
            motivation_snapshot=m.motivation_snapshot,
            years_experience_snapshot=m.years_experience_snapshot,
        )

    @staticmethod
    def _map_to_participant(p: ParticipantTable) -> Participant:
        return Participant(
            id=p.id,
            first_name=p.first_name,
            last_name=p.last_name,
            email=p.email,
        )
