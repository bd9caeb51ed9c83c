# ABOUTME: Tests for the Record base class on SQLModel tables
# ABOUTME: Validates pydantic-backed validation, protection and session-aware saves

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from active_presenter.exceptions import RecordInvalid
from active_presenter.persistence import DatabaseManager, set_database
from tables import Person, Workspace


@pytest.fixture
def database() -> DatabaseManager:
    """Provide an in-memory database manager installed as the global default."""
    db = DatabaseManager("sqlite:///:memory:")
    db.create_tables()
    set_database(db)
    yield db
    set_database(None)
    db.close()


def test_field_constraints_become_errors():
    errors = Person(login="jo").validation_errors()

    assert errors.fields() == ["login"]
    assert errors["login"]


def test_custom_rules_are_applied():
    errors = Person(login="admin").validation_errors()

    assert errors["login"] == ["is reserved"]


def test_valid_record():
    person = Person(login="james")

    assert person.is_valid()
    assert not person.validation_errors()


def test_protected_attributes():
    person = Person()

    assert person.protected_attributes({"role", "login"}) == {"role"}
    assert Workspace().protected_attributes({"id", "name"}) == {"id"}


def test_save_outside_transaction_commits(database: DatabaseManager):
    person = Person(login="james")

    assert person.is_new_record is True
    assert person.save() is True
    assert person.is_new_record is False

    with database.session() as session:
        assert session.exec(select(Person)).one().login == "james"


def test_invalid_save_returns_false(database: DatabaseManager):
    assert Person(login="jo").save() is False

    with database.session() as session:
        assert session.exec(select(Person)).all() == []


def test_save_or_raise_raises_record_invalid(database: DatabaseManager):
    person = Person(login="admin")

    with pytest.raises(RecordInvalid) as exc_info:
        person.save_or_raise()

    assert exc_info.value.record is person
    assert exc_info.value.errors["login"] == ["is reserved"]
    assert "Login is reserved" in str(exc_info.value)


def test_rejected_row_save_returns_false(database: DatabaseManager):
    assert Workspace(subdomain="taken").save() is True

    assert Workspace(subdomain="taken").save() is False

    with database.session() as session:
        assert len(session.exec(select(Workspace)).all()) == 1


def test_rejected_row_save_or_raise_propagates(database: DatabaseManager):
    assert Workspace(subdomain="taken").save() is True

    with pytest.raises(IntegrityError):
        Workspace(subdomain="taken").save_or_raise()
