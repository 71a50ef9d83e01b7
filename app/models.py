"""SQLAlchemy ORM models.

Actors and movies live in two tables. A movie does not hold a foreign key to
its actor: it keeps a copy of the actor's fields taken when the movie was
created or re-assigned, so later edits to the actor do not reach it.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class Actor(Base):
    """A person that can be cast in a movie."""

    __tablename__ = "actors"
    # AUTOINCREMENT keeps ids monotonic, a deleted id is never handed out again.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255))
    last_name: Mapped[str] = mapped_column(String(255))
    date_of_birth: Mapped[date] = mapped_column(Date)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Actor(id={self.id}, first_name={self.first_name}, last_name={self.last_name})"


class Movie(Base):
    """A titled work with the snapshot of the actor assigned to it."""

    __tablename__ = "movies"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    creation_date: Mapped[date] = mapped_column(Date)
    actor_id: Mapped[int] = mapped_column(Integer, index=True)
    actor_first_name: Mapped[str] = mapped_column(String(255))
    actor_last_name: Mapped[str] = mapped_column(String(255))
    actor_date_of_birth: Mapped[date] = mapped_column(Date)

    def assign_actor(self, actor: Actor) -> None:
        """Copy the actor's current fields onto the movie."""

        self.actor_id = actor.id
        self.actor_first_name = actor.first_name
        self.actor_last_name = actor.last_name
        self.actor_date_of_birth = actor.date_of_birth

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Movie(id={self.id}, title={self.title}, actor_id={self.actor_id})"
