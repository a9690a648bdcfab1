"""Unit tests for the canonical check-in record writer."""

import pytest
from unittest.mock import AsyncMock
from bson import ObjectId

from app.checkin.errors import PersistenceError
from app.checkin.models import Scale, ScaledMetrics, StressLevel
from app.checkin.services.checkin_record_writer import CheckInRecordWriter


@pytest.fixture
def mock_store():
    store = AsyncMock()
    store.upsert.return_value = {"_id": ObjectId()}
    return store


class TestUpsert:
    @pytest.mark.asyncio
    async def test_mirrors_persisted_scale(self, mock_store, sample_user_id):
        mock_store.exists.return_value = False
        writer = CheckInRecordWriter(mock_store)
        metrics = ScaledMetrics(scale=Scale.FIVE, energy=4, focus=5, mood=5, sleep=2)

        result = await writer.upsert(
            sample_user_id, "2024-01-02", metrics,
            intense_exercise=True, new_supplement=False, stress_level=StressLevel.LOW,
        )

        fields = mock_store.upsert.call_args.args[2]
        assert fields == {
            "mood": 5,
            "energy": 4,
            "focus": 5,
            "sleep": 2,
            "scale": 5,
            "stress_level": "low",
            "intense_exercise": True,
            "new_supplement": False,
        }
        assert result.created is True
        assert result.record_id == str(mock_store.upsert.return_value["_id"])

    @pytest.mark.asyncio
    async def test_resubmission_reports_existing_row(self, mock_store, sample_user_id):
        mock_store.exists.return_value = True
        writer = CheckInRecordWriter(mock_store)

        result = await writer.upsert(
            sample_user_id, "2024-01-02", ScaledMetrics(scale=Scale.TEN, energy=5, focus=5),
            intense_exercise=False, new_supplement=False, stress_level=None,
        )

        assert result.created is False
        assert mock_store.upsert.call_args.args[2]["stress_level"] is None

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, mock_store, sample_user_id):
        mock_store.exists.return_value = False
        mock_store.upsert.side_effect = PersistenceError("not authorized on checkins")
        writer = CheckInRecordWriter(mock_store)

        with pytest.raises(PersistenceError):
            await writer.upsert(
                sample_user_id, "2024-01-02", ScaledMetrics(scale=Scale.TEN, energy=5, focus=5),
                intense_exercise=False, new_supplement=False, stress_level=None,
            )
