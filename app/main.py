"""FastAPI entrypoint wiring the catalog service to the actor and movie routes."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import date

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db import get_session, init_models
from app.models import Actor, Movie
from app.services.catalog import CatalogError, CatalogService


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Ensure database tables before serving."""

    init_models()
    logger.info("%s ready", get_settings().app_title)
    yield


app = FastAPI(title=get_settings().app_title, lifespan=lifespan)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActorPayload(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: date | None = None


class ActorResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    date_of_birth: date


class MoviePayload(CamelModel):
    title: str | None = None
    creation_date: date | None = None
    actor_id: int | None = None


class MovieResponse(CamelModel):
    id: int
    title: str
    creation_date: date
    actor: ActorResponse


class ErrorResponse(BaseModel):
    message: str


def get_catalog(
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(session, settings=settings)


@app.exception_handler(CatalogError)
async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _describe_validation_error(exc)
    logger.warning("%s %s rejected: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post(
    "/actors",
    response_model=ActorResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_actor(payload: ActorPayload, catalog: CatalogService = Depends(get_catalog)) -> ActorResponse:
    actor = catalog.create_actor(
        first_name=payload.first_name,
        last_name=payload.last_name,
        date_of_birth=payload.date_of_birth,
    )
    return _actor_to_response(actor)


@app.get("/actors", response_model=list[ActorResponse])
def list_actors(catalog: CatalogService = Depends(get_catalog)) -> list[ActorResponse]:
    return [_actor_to_response(actor) for actor in catalog.list_actors()]


@app.get("/actors/{actor_id}", response_model=ActorResponse, responses={404: {"model": ErrorResponse}})
def get_actor(actor_id: int, catalog: CatalogService = Depends(get_catalog)) -> ActorResponse:
    return _actor_to_response(catalog.find_actor(actor_id))


@app.put(
    "/actors/{actor_id}",
    response_model=ActorResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_actor(
    actor_id: int,
    payload: ActorPayload,
    catalog: CatalogService = Depends(get_catalog),
) -> ActorResponse:
    actor = catalog.update_actor(
        actor_id,
        first_name=payload.first_name,
        last_name=payload.last_name,
        date_of_birth=payload.date_of_birth,
    )
    return _actor_to_response(actor)


@app.delete(
    "/actors/{actor_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_actor(actor_id: int, catalog: CatalogService = Depends(get_catalog)) -> Response:
    catalog.delete_actor(actor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@app.post(
    "/movies",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def create_movie(payload: MoviePayload, catalog: CatalogService = Depends(get_catalog)) -> MovieResponse:
    movie = catalog.create_movie(
        title=payload.title,
        creation_date=payload.creation_date,
        actor_id=payload.actor_id,
    )
    return _movie_to_response(movie)


@app.get("/movies", response_model=list[MovieResponse])
def list_movies(catalog: CatalogService = Depends(get_catalog)) -> list[MovieResponse]:
    return [_movie_to_response(movie) for movie in catalog.list_movies()]


@app.get("/movies/{movie_id}", response_model=MovieResponse, responses={404: {"model": ErrorResponse}})
def get_movie(movie_id: int, catalog: CatalogService = Depends(get_catalog)) -> MovieResponse:
    return _movie_to_response(catalog.get_movie(movie_id))


@app.put(
    "/movies/{movie_id}",
    response_model=MovieResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_movie(
    movie_id: int,
    payload: MoviePayload,
    catalog: CatalogService = Depends(get_catalog),
) -> MovieResponse:
    movie = catalog.update_movie(
        movie_id,
        title=payload.title,
        creation_date=payload.creation_date,
        actor_id=payload.actor_id,
    )
    return _movie_to_response(movie)


@app.delete(
    "/movies/{movie_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
def delete_movie(movie_id: int, catalog: CatalogService = Depends(get_catalog)) -> Response:
    catalog.delete_movie(movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _actor_to_response(actor: Actor) -> ActorResponse:
    return ActorResponse(
        id=actor.id,
        first_name=actor.first_name,
        last_name=actor.last_name,
        date_of_birth=actor.date_of_birth,
    )


def _movie_to_response(movie: Movie) -> MovieResponse:
    return MovieResponse(
        id=movie.id,
        title=movie.title,
        creation_date=movie.creation_date,
        actor=ActorResponse(
            id=movie.actor_id,
            first_name=movie.actor_first_name,
            last_name=movie.actor_last_name,
            date_of_birth=movie.actor_date_of_birth,
        ),
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query")]
    if first.get("type") == "json_invalid" or not location:
        return "Request body must be a valid JSON object."
    return f"Invalid {'.'.join(location)}: {first.get('msg', 'invalid value')}"
