from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.deps import get_team_service
from domain.models.identity import Team
from domain.services.team_service import TeamService

router = APIRouter(prefix="/teams", tags=["teams"])


class TeamMemberOut(BaseModel):
    participant_id: UUID
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    skills: Optional[str] = None
    motivation: Optional[int] = None
    years_experience: Optional[int] = None


class TeamOut(BaseModel):
    id: UUID
    name: str
    score: float
    generation_id: Optional[UUID]
    hackathon_id: UUID
    created_at: datetime
    members: List[TeamMemberOut]

    @classmethod
    def from_domain(cls, team: Team) -> "TeamOut":
        return cls(
            id=team.id,
            name=team.name,
            score=team.score,
            generation_id=team.generation_id,
            hackathon_id=team.hackathon_id,
            created_at=team.created_at,
            members=[
                TeamMemberOut(
                    participant_id=m.participant_id,
                    first_name=m.first_name,
                    last_name=m.last_name,
                    role=m.role_snapshot,
                    skills=m.skills_snapshot,
                    motivation=m.motivation_snapshot,
                    years_experience=m.years_experience_snapshot,
                )
                for m in team.members
            ],
        )


class GenerateTeamsIn(BaseModel):
    hackathon_id: UUID
    team_size: Optional[int] = None


class GenerateTeamsOut(BaseModel):
    generation_id: UUID


class TeamRenameIn(BaseModel):
    name: str


class TeamAddMembersIn(BaseModel):
    participant_ids: List[Optional[UUID]] = Field(default_factory=list)


class TeamMoveMemberIn(BaseModel):
    participant_id: UUID
    target_team_id: UUID


@router.post("/generate", response_model=GenerateTeamsOut, status_code=201)
def generate_teams(
    payload: GenerateTeamsIn,
    service: TeamService = Depends(get_team_service),
):
    generation_id = service.generate(payload.team_size, payload.hackathon_id)
    return GenerateTeamsOut(generation_id=generation_id)


@router.get("/", response_model=List[TeamOut])
def list_teams(
    generation_id: Optional[UUID] = None,
    service: TeamService = Depends(get_team_service),
):
    return [TeamOut.from_domain(t) for t in service.list_teams(generation_id)]


@router.get("/hackathon/{hackathon_id}", response_model=List[TeamOut])
def list_teams_by_hackathon(
    hackathon_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    return [TeamOut.from_domain(t) for t in service.list_teams_by_hackathon(hackathon_id)]


@router.post("/move", status_code=204)
def move_member(
    payload: TeamMoveMemberIn,
    service: TeamService = Depends(get_team_service),
):
    service.move_member(payload.participant_id, payload.target_team_id)
    return None


@router.get("/{team_id}", response_model=TeamOut)
def get_team(
    team_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    return TeamOut.from_domain(service.get_team(team_id))


@router.patch("/{team_id}/name", response_model=TeamOut)
def rename_team(
    team_id: UUID,
    payload: TeamRenameIn,
    service: TeamService = Depends(get_team_service),
):
    return TeamOut.from_domain(service.rename_team(team_id, payload.name))


@router.post("/{team_id}/members", response_model=TeamOut)
def add_members(
    team_id: UUID,
    payload: TeamAddMembersIn,
    service: TeamService = Depends(get_team_service),
):
    return TeamOut.from_domain(service.add_members(team_id, payload.participant_ids))


@router.delete("/{team_id}/members/{participant_id}", response_model=TeamOut)
def remove_member(
    team_id: UUID,
    participant_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    return TeamOut.from_domain(service.remove_member(team_id, participant_id))


@router.delete("/{team_id}", status_code=204)
def delete_team(
    team_id: UUID,
    service: TeamService = Depends(get_team_service),
):
    service.delete_team(team_id)
    return None
