"""Database session management and repositories."""

from __future__ import annotations

from datetime import date
from typing import Iterator

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.models import Actor, Base, Movie


def build_engine(url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""

    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )
    return create_engine(url, future=True)


# SQLite INTEGER is a signed 64-bit value; ids outside it cannot exist.
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def storable_id(value: int) -> bool:
    return MIN_ID <= value <= MAX_ID


engine = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_models(bind: Engine | None = None) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=bind or engine)


def get_session() -> Iterator[Session]:
    """FastAPI-friendly dependency that manages commits/rollbacks."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


class ActorRepository:
    """Data access helpers for actor records."""

    def get(self, session: Session, actor_id: int) -> Actor | None:
        if not storable_id(actor_id):
            return None
        return session.get(Actor, actor_id)

    def list_all(self, session: Session) -> list[Actor]:
        query = select(Actor).order_by(Actor.id)
        return list(session.execute(query).scalars())

    def create(
        self,
        session: Session,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
    ) -> Actor:
        actor = Actor(first_name=first_name, last_name=last_name, date_of_birth=date_of_birth)
        session.add(actor)
        session.flush()  # assign IDs before leaving scope
        session.refresh(actor)
        return actor

    def update(self, session: Session, actor: Actor, **fields) -> Actor:
        for name, value in fields.items():
            setattr(actor, name, value)
        session.flush()
        return actor

    def delete(self, session: Session, actor: Actor) -> None:
        session.delete(actor)
        session.flush()


class MovieRepository:
    """Data access helpers for movie records."""

    def get(self, session: Session, movie_id: int) -> Movie | None:
        if not storable_id(movie_id):
            return None
        return session.get(Movie, movie_id)

    def list_all(self, session: Session) -> list[Movie]:
        query = select(Movie).order_by(Movie.id)
        return list(session.execute(query).scalars())

    def exists_for_actor(self, session: Session, actor_id: int, *, exclude_movie_id: int | None = None) -> bool:
        query = select(Movie.id).where(Movie.actor_id == actor_id)
        if exclude_movie_id is not None:
            query = query.where(Movie.id != exclude_movie_id)
        return session.execute(query.limit(1)).first() is not None

    def create(
        self,
        session: Session,
        *,
        title: str,
        creation_date: date,
        actor: Actor,
    ) -> Movie:
        movie = Movie(title=title, creation_date=creation_date)
        movie.assign_actor(actor)
        session.add(movie)
        session.flush()
        session.refresh(movie)
        return movie

    def update(
        self,
        session: Session,
        movie: Movie,
        *,
        actor: Actor | None = None,
        **fields,
    ) -> Movie:
        for name, value in fields.items():
            setattr(movie, name, value)
        if actor is not None:
            movie.assign_actor(actor)
        session.flush()
        return movie

    def delete(self, session: Session, movie: Movie) -> None:
        session.delete(movie)
        session.flush()
