import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes.teams import router as teams_router
from domain.exceptions import DomainError, NotFoundError, ConflictError, InvalidInputError
from infrastructure.settings import get_settings

from dotenv import load_dotenv
load_dotenv()

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Hackathon Team Formation")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Allow everything for now
    allow_methods=["*"],
    allow_headers=["*"],
)


def status_for(error: DomainError) -> int:
    if isinstance(error, NotFoundError):
        return 404
    if isinstance(error, ConflictError):
        return 409
    if isinstance(error, InvalidInputError):
        return 400
    return 400


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})


app.include_router(teams_router)
