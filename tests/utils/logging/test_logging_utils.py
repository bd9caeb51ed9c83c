# ABOUTME: Tests for structured logger helpers
# ABOUTME: Validates operation ids and presenter context binding

import pytest
from structlog.testing import capture_logs

from active_presenter.presenter import Presenter
from active_presenter.utils.logging.utils import (
    LogContext,
    generate_operation_id,
    get_logger,
    with_presenter_context,
)
from fakes import Account, User


class SignupPresenter(Presenter):
    presents = {"user": User, "account": Account}


def test_generate_operation_id_is_short_and_unique():
    first, second = generate_operation_id(), generate_operation_id()

    assert len(first) == 8
    assert first != second


def test_get_logger_defaults_to_caller_module():
    with capture_logs() as logs:
        get_logger().info("hello")

    assert logs[0]["event"] == "hello"


def test_presenter_context_binds_presented_types():
    with capture_logs() as logs:
        with with_presenter_context(SignupPresenter()) as log:
            log.info("saving")

    assert logs[0]["presenter"] == "SignupPresenter"
    assert logs[0]["presented"] == ["user", "account"]


def test_log_context_reports_errors():
    with capture_logs() as logs, pytest.raises(RuntimeError):
        with LogContext(get_logger("tests"), step="commit"):
            raise RuntimeError("boom")

    assert logs[-1]["event"] == "Context operation failed"
    assert logs[-1]["step"] == "commit"
