"""Tests for poforecast/domain/exceptions.py."""

import pytest

from poforecast.domain.exceptions import (
    ForecastError,
    InsufficientAlignedHistoryError,
    InsufficientHistoryError,
    InvalidArgumentError,
    RepositoryError,
)


def test_invalid_argument_is_value_error():
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(InvalidArgumentError, ForecastError)


def test_default_message_used_when_none_given():
    assert str(RepositoryError()) == "Repository failure"


def test_insufficient_history_message_names_part_and_counts():
    exc = InsufficientHistoryError("888012", 23, 24)
    assert "PART_CODE=888012" in str(exc)
    assert "Got 23 months" in str(exc)
    assert "at least 24" in str(exc)


def test_insufficient_history_exposes_counts():
    exc = InsufficientHistoryError("P1", 5, 24)
    assert (exc.part_code, exc.count, exc.required) == ("P1", 5, 24)


def test_insufficient_history_custom_message():
    exc = InsufficientHistoryError("", 3, 5, message="too short")
    assert str(exc) == "too short"


def test_aligned_history_is_not_a_history_error():
    # Callers distinguish "no purchases" from "no CPI coverage".
    assert not issubclass(InsufficientAlignedHistoryError, InsufficientHistoryError)


def test_aligned_history_message():
    exc = InsufficientAlignedHistoryError("888012", 20, 24)
    assert "CPI-aligned" in str(exc)
    assert exc.count == 20


def test_to_dict_includes_details():
    payload = InsufficientHistoryError("P1", 1, 24).to_dict()
    assert payload["error"] == "InsufficientHistoryError"
    assert payload["details"] == {"part_code": "P1", "count": 1, "required": 24}


def test_to_dict_omits_empty_details():
    assert "details" not in InvalidArgumentError("bad").to_dict()


def test_raise_and_catch_as_base():
    with pytest.raises(ForecastError):
        raise RepositoryError("db down")
