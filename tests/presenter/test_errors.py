# ABOUTME: Tests for the ErrorSet aggregate
# ABOUTME: Validates ordering, coercion from entity reports and full message rendering

from active_presenter.presenter.errors import BASE, ErrorSet


def test_empty_error_set_is_falsy():
    errors = ErrorSet()

    assert not errors
    assert len(errors) == 0
    assert errors["login"] == []


def test_add_keeps_message_order():
    errors = ErrorSet()
    errors.add("login", "can't be blank")
    errors.add("login", "is too short")
    errors.add("email", "is invalid")

    assert errors["login"] == ["can't be blank", "is too short"]
    assert list(errors.messages()) == [
        ("login", "can't be blank"),
        ("login", "is too short"),
        ("email", "is invalid"),
    ]
    assert len(errors) == 3
    assert errors.fields() == ["login", "email"]


def test_lookup_returns_a_copy():
    errors = ErrorSet({"login": ["can't be blank"]})

    errors["login"].append("tampered")

    assert errors["login"] == ["can't be blank"]


def test_clear():
    errors = ErrorSet({"login": ["can't be blank"]})

    errors.clear()

    assert not errors
    assert "login" not in errors


def test_coerce_accepts_single_messages_and_sequences():
    errors = ErrorSet.coerce({"login": "can't be blank", "email": ["is invalid", "is taken"]})

    assert errors.to_dict() == {"login": ["can't be blank"], "email": ["is invalid", "is taken"]}


def test_coerce_passes_error_sets_through():
    errors = ErrorSet({"login": ["can't be blank"]})

    assert ErrorSet.coerce(errors) is errors
    assert not ErrorSet.coerce(None)


def test_full_messages():
    errors = ErrorSet({"password_confirmation": ["doesn't match"], BASE: ["Signup is closed"]})

    assert errors.full_messages() == ["Password confirmation doesn't match", "Signup is closed"]
    assert errors.full_messages(str.upper) == ["PASSWORD_CONFIRMATION doesn't match", "Signup is closed"]


def test_equality_with_mappings():
    assert ErrorSet({"login": ["x"]}) == {"login": ["x"]}
    assert ErrorSet({"login": ["x"]}) != ErrorSet({"login": ["y"]})
