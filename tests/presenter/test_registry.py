# ABOUTME: Tests for presenter entity registration and inheritance
# ABOUTME: Validates declaration order, subclass extension and generated accessors

import pytest

from active_presenter.presenter import Presenter, presented_entity
from active_presenter.presenter.registry import EntityRegistry
from fakes import Account, User, UserProfile


class BasePresenter(Presenter):
    presents = {"user": User}


class ExtendedPresenter(BasePresenter):
    presents = {"account": Account}


def test_declaration_order_is_kept():
    class OrderedPresenter(Presenter):
        presents = {"account": Account, "user": User, "user_profile": UserProfile}

    assert list(OrderedPresenter.presented) == ["account", "user", "user_profile"]


def test_subclass_extends_without_touching_parent():
    assert list(BasePresenter.presented) == ["user"]
    assert list(ExtendedPresenter.presented) == ["user", "account"]
    assert list(Presenter.presented) == []


def test_accessors_are_generated():
    presenter = ExtendedPresenter()

    assert isinstance(presenter.user, User)
    assert isinstance(presenter.account, Account)
    assert not presenter.account_errors


def test_register_presented_programmatically():
    class LatePresenter(Presenter):
        pass

    LatePresenter.register_presented(user_profile=UserProfile)

    assert isinstance(LatePresenter().user_profile, UserProfile)


def test_entry_builds_and_accepts():
    registry = EntityRegistry().extended({"user": presented_entity(User, factory=lambda: User(login="seed"))})
    entry = registry["user"]

    assert entry.entity_class is User
    assert entry.build().login == "seed"
    assert entry.accepts(User())
    assert not entry.accepts(Account())


def test_rejects_non_class_declarations():
    with pytest.raises(TypeError):
        EntityRegistry().extended({"user": "User"})


def test_rejects_invalid_type_names():
    with pytest.raises(ValueError):
        EntityRegistry().extended({"user-profile": UserProfile})


def test_rejects_bare_factories():
    with pytest.raises(TypeError):
        EntityRegistry().extended({"user": lambda: User(login="seed")})


def test_presented_entity_requires_a_class():
    with pytest.raises(TypeError):
        presented_entity(lambda: User())
