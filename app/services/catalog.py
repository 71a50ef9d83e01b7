"""Business rules for actors and the movies they are assigned to."""

from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db import ActorRepository, MovieRepository
from app.models import Actor, Movie


logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base exception for rejected catalog operations."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(CatalogError):
    """Raised when a request carries missing, blank or out-of-range fields."""


class ActorAssigned(ValidationFailed):
    """Raised when an actor's movie assignment forbids the operation."""


class NotFound(CatalogError):
    """Raised when an identifier does not resolve to a stored record."""

    status_code = 404


def is_future_date(value: date, *, today: date | None = None) -> bool:
    """True when ``value`` falls after today; today itself is not future."""

    today = today or date.today()
    return value > today


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CatalogService:
    """Actor and movie operations over an injected session and repositories."""

    def __init__(
        self,
        session: Session,
        *,
        settings: Settings | None = None,
        actors: ActorRepository | None = None,
        movies: MovieRepository | None = None,
    ) -> None:
        self.session = session
        self.settings = settings or get_settings()
        self.actors = actors or ActorRepository()
        self.movies = movies or MovieRepository()

    # Actors

    def find_actor(self, actor_id: int) -> Actor:
        actor = self.actors.get(self.session, actor_id)
        if actor is None:
            raise NotFound("Actor not found")
        return actor

    def list_actors(self) -> list[Actor]:
        return self.actors.list_all(self.session)

    def create_actor(
        self,
        *,
        first_name: str | None,
        last_name: str | None,
        date_of_birth: date | None,
    ) -> Actor:
        if is_blank(first_name) or is_blank(last_name) or date_of_birth is None:
            raise ValidationFailed("First name, last name, and date of birth are required.")
        if is_future_date(date_of_birth):
            raise ValidationFailed("Date of birth cannot be in the future.")

        actor = self.actors.create(
            self.session,
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
        )
        logger.info("Created actor %s (%s %s)", actor.id, actor.first_name, actor.last_name)
        return actor

    def update_actor(
        self,
        actor_id: int,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        date_of_birth: date | None = None,
    ) -> Actor:
        actor = self.find_actor(actor_id)
        partial = self.settings.partial_updates

        if (first_name is not None or not partial) and is_blank(first_name):
            raise ValidationFailed("First name cannot be empty.")
        if (last_name is not None or not partial) and is_blank(last_name):
            raise ValidationFailed("Last name cannot be empty.")
        if date_of_birth is None and not partial:
            raise ValidationFailed("Date of birth cannot be empty.")
        if date_of_birth is not None and is_future_date(date_of_birth):
            raise ValidationFailed("Date of birth cannot be in the future.")

        fields = {
            "first_name": first_name,
            "last_name": last_name,
            "date_of_birth": date_of_birth,
        }
        changes = {name: value for name, value in fields.items() if value is not None}
        self.actors.update(self.session, actor, **changes)
        logger.info("Updated actor %s fields=%s", actor.id, sorted(changes))
        return actor

    def delete_actor(self, actor_id: int) -> None:
        actor = self.find_actor(actor_id)
        if self.movies.exists_for_actor(self.session, actor.id):
            raise ActorAssigned("Cannot delete actor because they are assigned to a movie.")
        self.actors.delete(self.session, actor)
        logger.info("Deleted actor %s", actor_id)

    # Movies

    def get_movie(self, movie_id: int) -> Movie:
        movie = self.movies.get(self.session, movie_id)
        if movie is None:
            raise NotFound("Movie not found")
        return movie

    def list_movies(self) -> list[Movie]:
        return self.movies.list_all(self.session)

    def create_movie(
        self,
        *,
        title: str | None,
        creation_date: date | None,
        actor_id: int | None,
    ) -> Movie:
        if not actor_id:
            raise ValidationFailed("Actor ID must be supplied.")
        actor = self.find_actor(actor_id)
        if is_blank(title):
            raise ValidationFailed("Title cannot be empty.")
        if creation_date is None:
            raise ValidationFailed("Creation date cannot be empty.")
        self._ensure_assignable(actor)

        movie = self.movies.create(
            self.session,
            title=title,
            creation_date=creation_date,
            actor=actor,
        )
        logger.info("Created movie %s (%s) with actor %s", movie.id, movie.title, actor.id)
        return movie

    def update_movie(
        self,
        movie_id: int,
        *,
        title: str | None = None,
        creation_date: date | None = None,
        actor_id: int | None = None,
    ) -> Movie:
        movie = self.get_movie(movie_id)

        if not self.settings.partial_updates and (
            is_blank(title) or creation_date is None or not actor_id
        ):
            raise ValidationFailed("Title, creation date, and actor ID must be provided.")
        if title is not None and is_blank(title):
            raise ValidationFailed("Title cannot be empty.")

        actor = None
        if actor_id is not None:
            actor = self.find_actor(actor_id)
            self._ensure_assignable(actor, movie=movie)

        changes = {
            name: value
            for name, value in (("title", title), ("creation_date", creation_date))
            if value is not None
        }
        self.movies.update(self.session, movie, actor=actor, **changes)
        logger.info("Updated movie %s actor=%s", movie.id, movie.actor_id)
        return movie

    def delete_movie(self, movie_id: int) -> None:
        movie = self.get_movie(movie_id)
        self.movies.delete(self.session, movie)
        logger.info("Deleted movie %s", movie_id)

    def _ensure_assignable(self, actor: Actor, *, movie: Movie | None = None) -> None:
        if not self.settings.exclusive_actor_assignment:
            return
        exclude = movie.id if movie is not None else None
        if self.movies.exists_for_actor(self.session, actor.id, exclude_movie_id=exclude):
            raise ActorAssigned("Actor is already assigned to a movie.")
