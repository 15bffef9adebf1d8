"""Tests for JustificationService."""

from unittest.mock import MagicMock

import pytest

from models.justification import Justification
from repositories.justification_repo import JustificationRepository
from services.justification_service import (
    INVALID_BLOCK_NUMBER,
    MISSING_PARAMETERS,
    JustificationService,
    ValidationError,
)


@pytest.fixture
def repo():
    return MagicMock(spec=JustificationRepository)


@pytest.fixture
def service(repo):
    return JustificationService(repo)


class TestParseQuery:

    def test_valid_parameters(self):
        assert JustificationService.parse_query("12345", "Avail-Turing") == ("Avail-Turing", 12345)

    def test_zero_is_a_valid_block(self):
        assert JustificationService.parse_query("0", "c") == ("c", 0)

    @pytest.mark.parametrize("block_number, chain_id", [
        (None, "chain1"),
        ("5", None),
        (None, None),
        ("", "chain1"),
        ("5", "   "),
    ])
    def test_missing_parameters(self, block_number, chain_id):
        with pytest.raises(ValidationError, match=MISSING_PARAMETERS):
            JustificationService.parse_query(block_number, chain_id)

    @pytest.mark.parametrize("block_number", ["-1", "1.5", "abc", "1e3", "٣"])
    def test_malformed_block_number(self, block_number):
        with pytest.raises(ValidationError, match=INVALID_BLOCK_NUMBER):
            JustificationService.parse_query(block_number, "chain1")


def test_get_delegates_to_repository(service, repo):
    record = Justification(avail_chain_id="chain1", block_number=5, data={"a": 1})
    repo.get.return_value = record

    assert service.get_justification("chain1", 5) is record
    repo.get.assert_called_once_with("chain1", 5)


def test_get_absent_returns_none(service, repo):
    repo.get.return_value = None
    assert service.get_justification("chain1", 5) is None


def test_store_delegates_to_put(service, repo):
    service.store_justification("chain1", 5, {"a": 1})
    repo.put.assert_called_once_with("chain1", 5, {"a": 1})


@pytest.mark.parametrize("chain_id, block_number", [("", 5), ("chain1", -1)])
def test_store_rejects_invalid_keys(service, repo, chain_id, block_number):
    with pytest.raises(ValidationError):
        service.store_justification(chain_id, block_number, {})
    repo.put.assert_not_called()


def test_latest_block_number(service, repo):
    repo.latest_block_number.return_value = 99
    assert service.latest_block_number("chain1") == 99
