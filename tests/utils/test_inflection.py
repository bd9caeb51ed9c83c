# ABOUTME: Tests for attribute-name humanization
# ABOUTME: Validates label formatting used by error messages

import pytest

from active_presenter.utils.inflection import humanize


@pytest.mark.parametrize(
    ("name", "label"),
    [
        ("login", "Login"),
        ("password_confirmation", "Password confirmation"),
        ("account_id", "Account"),
        ("_private_note", "Private note"),
        ("URL", "Url"),
        ("", ""),
    ],
)
def test_humanize(name, label):
    assert humanize(name) == label
