import datetime as dt

import pytest

from app.db import ActorRepository, MovieRepository, get_session
from app.services import catalog as catalog_service
from app.services.catalog import ActorAssigned, CatalogService, NotFound, ValidationFailed


@pytest.fixture
def catalog(session, settings):
    return CatalogService(session, settings=settings)


@pytest.fixture
def tom(catalog):
    return catalog.create_actor(first_name="Tom", last_name="Hanks", date_of_birth=dt.date(1956, 7, 9))


def test_is_future_date_variants():
    today = dt.date(2026, 3, 18)
    assert catalog_service.is_future_date(dt.date(2026, 3, 19), today=today)
    assert not catalog_service.is_future_date(dt.date(2026, 3, 18), today=today)
    assert not catalog_service.is_future_date(dt.date(1956, 7, 9), today=today)


def test_is_blank():
    assert catalog_service.is_blank(None)
    assert catalog_service.is_blank("")
    assert catalog_service.is_blank(" \t")
    assert not catalog_service.is_blank("Tom")


def test_error_status_codes():
    assert ValidationFailed("x").status_code == 400
    assert ActorAssigned("x").status_code == 400
    assert NotFound("x").status_code == 404


def test_find_actor_raises_not_found(catalog):
    with pytest.raises(NotFound) as excinfo:
        catalog.find_actor(1)
    assert excinfo.value.message == "Actor not found"


def test_create_movie_checks_actor_before_title(catalog):
    with pytest.raises(NotFound):
        catalog.create_movie(title="", creation_date=None, actor_id=10)


def test_create_movie_copies_actor_fields(catalog, tom):
    movie = catalog.create_movie(title="Big", creation_date=dt.date(1988, 6, 3), actor_id=tom.id)
    assert movie.actor_id == tom.id
    assert movie.actor_first_name == "Tom"
    assert movie.actor_last_name == "Hanks"
    assert movie.actor_date_of_birth == dt.date(1956, 7, 9)


def test_delete_assigned_actor_is_rejected(catalog, tom):
    catalog.create_movie(title="Big", creation_date=dt.date(1988, 6, 3), actor_id=tom.id)
    with pytest.raises(ActorAssigned):
        catalog.delete_actor(tom.id)


def test_update_actor_rejects_future_date_without_mutating(catalog, tom):
    with pytest.raises(ValidationFailed):
        catalog.update_actor(
            tom.id,
            first_name="Thomas",
            last_name="Hanks",
            date_of_birth=dt.date.today() + dt.timedelta(days=30),
        )
    assert catalog.find_actor(tom.id).first_name == "Tom"


def test_exists_for_actor_excludes_given_movie(session, catalog, tom):
    movie = catalog.create_movie(title="Big", creation_date=dt.date(1988, 6, 3), actor_id=tom.id)
    repo = MovieRepository()
    assert repo.exists_for_actor(session, tom.id)
    assert not repo.exists_for_actor(session, tom.id, exclude_movie_id=movie.id)


def test_list_movies_ordered_by_id(catalog, tom):
    first = catalog.create_movie(title="Big", creation_date=dt.date(1988, 6, 3), actor_id=tom.id)
    second = catalog.create_movie(title="Splash", creation_date=dt.date(1984, 3, 9), actor_id=tom.id)
    assert [movie.id for movie in catalog.list_movies()] == [first.id, second.id]


def test_repositories_treat_out_of_range_ids_as_absent(session):
    assert ActorRepository().get(session, 2**63) is None
    assert MovieRepository().get(session, -(2**63) - 1) is None


def test_get_session_commits_on_success(monkeypatch, session_factory):
    monkeypatch.setattr("app.db.SessionLocal", session_factory)
    dependency = get_session()
    session = next(dependency)
    ActorRepository().create(session, first_name="Tom", last_name="Hanks", date_of_birth=dt.date(1956, 7, 9))
    with pytest.raises(StopIteration):
        next(dependency)

    with session_factory() as check:
        assert [actor.first_name for actor in ActorRepository().list_all(check)] == ["Tom"]


def test_get_session_rolls_back_on_error(monkeypatch, session_factory):
    monkeypatch.setattr("app.db.SessionLocal", session_factory)
    dependency = get_session()
    session = next(dependency)
    ActorRepository().create(session, first_name="Tom", last_name="Hanks", date_of_birth=dt.date(1956, 7, 9))
    with pytest.raises(RuntimeError):
        dependency.throw(RuntimeError("request failed"))

    with session_factory() as check:
        assert ActorRepository().list_all(check) == []
