from fastapi import Depends
from sqlalchemy.orm import Session

from infrastructure.database import get_db
from infrastructure.settings import Settings, get_settings
from infrastructure.adapters.repository.sqlalchemy_repository import SqlAlchemyRepository

from domain.services.team_service import TeamService


def get_repository(db: Session = Depends(get_db)) -> SqlAlchemyRepository:
    return SqlAlchemyRepository(db)


def get_team_service(
    repo: SqlAlchemyRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> TeamService:
    return TeamService(
        repository=repo,
        default_team_size=settings.default_team_size,
        min_team_size=settings.min_team_size,
    )
