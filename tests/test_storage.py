from datetime import timedelta
from unittest.mock import patch

import pytest

from recoverytrack.config import Settings
from recoverytrack.engine.pipeline import build_recovery_plan
from recoverytrack.models.enums import StressLevel
from recoverytrack.models.session import Session
from recoverytrack.models.subject import History
from recoverytrack.storage.dynamo_local import (
    DynamoLocalSessionStore,
    _convert_decimals,
    _convert_floats,
)
from recoverytrack.storage.factory import get_session_store
from recoverytrack.storage.memory import InMemorySessionStore
from tests.conftest import TODAY


@pytest.fixture
def full_session(backlog_subjects, moderate_profile) -> Session:
    results = build_recovery_plan(backlog_subjects, moderate_profile, today=TODAY, load_factor=0.9)
    return Session(
        subjects=backlog_subjects,
        profile=moderate_profile,
        results=results,
        history=History(completion_rates=[45.5], stress_levels=[StressLevel.HIGH]),
        load_factor=0.9,
    )


class TestInMemoryStore:
    def test_missing_key(self):
        assert InMemorySessionStore().load("nobody") is None

    def test_round_trip(self, full_session):
        store = InMemorySessionStore()
        store.save("s1", full_session)
        loaded = store.load("s1")
        assert loaded.model_dump() == full_session.model_dump()
        assert loaded.results.plan.days[0].day_id == "day-1"

    def test_save_replaces_whole_session(self, full_session):
        store = InMemorySessionStore()
        store.save("s1", full_session)
        store.save("s1", Session())
        assert store.load("s1").results is None

    def test_corrupt_payload_discarded(self):
        store = InMemorySessionStore()
        store.put_raw("s1", "{not json")
        assert store.load("s1") is None
        store.put_raw("s1", '{"load_factor": 3.0}')
        assert store.load("s1") is None

    def test_delete(self, full_session):
        store = InMemorySessionStore()
        store.save("s1", full_session)
        store.delete("s1")
        store.delete("s1")
        assert store.load("s1") is None


class TestSessionStoreFactory:
    def test_memory_by_default(self):
        assert isinstance(get_session_store(Settings(_env_file=None)), InMemorySessionStore)

    @patch("recoverytrack.storage.factory.DynamoLocalSessionStore")
    def test_dynamo_from_settings(self, mock_store_cls):
        settings = Settings(
            _env_file=None,
            session_backend="dynamo",
            dynamo_endpoint="http://dynamo:9000",
            dynamo_region="eu-west-1",
            session_table="RecoverySessions",
        )
        store = get_session_store(settings)
        assert store is mock_store_cls.return_value
        mock_store_cls.assert_called_once_with(
            endpoint_url="http://dynamo:9000",
            region="eu-west-1",
            table_name="RecoverySessions",
        )

    def test_backend_from_environment(self, monkeypatch):
        monkeypatch.setenv("RECOVERYTRACK_SESSION_BACKEND", "dynamo")
        assert Settings(_env_file=None).session_backend == "dynamo"


class TestDecimalConversion:
    def test_floats_become_decimals_and_back(self):
        data = {"hours": 2.25, "days": [1, 0.5], "name": "x"}
        converted = _convert_floats(data)
        assert str(converted["hours"]) == "2.25"
        assert _convert_decimals(converted) == data

    def test_whole_decimals_become_ints(self):
        assert _convert_decimals(_convert_floats({"score": 4.0})) == {"score": 4}


@pytest.fixture
def dynamo_store():
    """Requires DynamoDB Local running on localhost:8000."""
    try:
        return DynamoLocalSessionStore(table_name="SessionsTest")
    except Exception:
        pytest.skip("DynamoDB Local not available")


@pytest.mark.integration
class TestDynamoLocalStore:
    def test_round_trip(self, dynamo_store, full_session):
        dynamo_store.save("storage-test-1", full_session)
        loaded = dynamo_store.load("storage-test-1")
        assert loaded is not None
        assert loaded.load_factor == 0.9
        assert [s.name for s in loaded.results.subjects] == [s.name for s in full_session.results.subjects]
        assert loaded.results.plan.days[0].date == TODAY + timedelta(days=1)
        dynamo_store.delete("storage-test-1")

    def test_not_found(self, dynamo_store):
        assert dynamo_store.load("nonexistent") is None
