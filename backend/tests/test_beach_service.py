"""
Copenhagen Beaches Proxy — Beach Service Unit Tests
====================================================

What:  Tests for filtering, default substitution and the get_beaches workflow.
How:   Uses an in-memory BeachDataSource, so no HTTP is involved.

What we test:
    ✅ Only exact "København" matches survive the filter, in upstream order
    ✅ Falsy text fields become "Unknown"
    ✅ Only the camelCase lastUpdated key is read upstream
    ✅ Missing/null coordinates become 0; present values pass through
    ✅ Envelope fields (success, count, source, timestamp)
    ✅ Upstream errors propagate; processing errors are wrapped
"""

import re
from typing import List
from unittest.mock import patch

import pytest

from app.exceptions import UpstreamError, UpstreamStatusError
from app.schemas.beach import UpstreamBeachRecord
from app.services.beach_service import (
    BeachService,
    clean_record,
    filter_by_municipality,
)
from app.services.upstream_base import BeachDataSource


class StaticSource(BeachDataSource):
    """Returns a fixed list of records, or raises a fixed error."""

    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error
        self.calls = 0

    @property
    def host(self) -> str:
        return "static.test"

    async def fetch_beaches(self) -> List[UpstreamBeachRecord]:
        self.calls += 1
        if self.error:
            raise self.error
        return [UpstreamBeachRecord.model_validate(r) for r in self.records]


def _record(**fields) -> UpstreamBeachRecord:
    return UpstreamBeachRecord.model_validate(fields)


class TestFilterByMunicipality:

    def test_keeps_exact_matches_in_order(self, upstream_records):
        records = [UpstreamBeachRecord.model_validate(r) for r in upstream_records]
        result = filter_by_municipality(records, "København")
        assert [r.name for r in result] == ["Amager Strand", "Islands Brygge Havnebad"]

    def test_match_is_case_sensitive(self):
        records = [_record(name="A", municipality="københavn")]
        assert filter_by_municipality(records, "København") == []

    def test_no_diacritic_folding(self):
        records = [_record(name="A", municipality="Kobenhavn")]
        assert filter_by_municipality(records, "København") == []

    def test_missing_municipality_is_dropped(self):
        records = [_record(name="A")]
        assert filter_by_municipality(records, "København") == []


class TestCleanRecord:

    def test_full_record_is_copied(self):
        cleaned = clean_record(_record(
            name="A", municipality="København", region="R",
            latitude=1, longitude=2, status="Open", lastUpdated="t",
        ))
        assert cleaned.model_dump(by_alias=True) == {
            "name": "A",
            "municipality": "København",
            "region": "R",
            "latitude": 1,
            "longitude": 2,
            "status": "Open",
            "lastUpdated": "t",
        }

    def test_missing_status_becomes_unknown(self):
        cleaned = clean_record(_record(name="A", municipality="København"))
        assert cleaned.status == "Unknown"

    def test_empty_and_null_text_become_unknown(self):
        cleaned = clean_record(_record(name="", region=None, lastUpdated=""))
        assert cleaned.name == "Unknown"
        assert cleaned.region == "Unknown"
        assert cleaned.last_updated == "Unknown"

    def test_missing_coordinates_default_to_zero(self):
        cleaned = clean_record(_record(name="A", latitude=None))
        assert cleaned.latitude == 0
        assert cleaned.longitude == 0

    def test_present_zero_coordinate_is_preserved(self):
        cleaned = clean_record(_record(name="A", latitude=0, longitude=0.0))
        assert cleaned.latitude == 0
        assert cleaned.longitude == 0.0

    def test_unknown_fields_are_dropped(self):
        cleaned = clean_record(_record(name="A", waterTemperature=18.2))
        assert "waterTemperature" not in cleaned.model_dump(by_alias=True)

    def test_snake_case_last_updated_is_ignored(self):
        # Only the upstream key lastUpdated feeds the output field
        cleaned = clean_record(_record(
            name="A", municipality="København", last_updated="2024-06-01",
        ))
        assert cleaned.last_updated == "Unknown"

    def test_camel_case_wins_over_snake_case(self):
        cleaned = clean_record(_record(lastUpdated="t", last_updated="other"))
        assert cleaned.last_updated == "t"


class TestGetBeaches:

    @pytest.mark.asyncio
    async def test_success_envelope(self, upstream_records):
        service = BeachService(source=StaticSource(upstream_records))
        result = await service.get_beaches()

        assert result.success is True
        assert result.count == 2
        assert [b.name for b in result.data] == ["Amager Strand", "Islands Brygge Havnebad"]
        assert result.source == "api.badevand.dk"
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", result.timestamp)

    @pytest.mark.asyncio
    async def test_empty_result_when_no_match(self):
        service = BeachService(source=StaticSource([{"name": "B", "municipality": "Aarhus"}]))
        result = await service.get_beaches()
        assert result.count == 0
        assert result.data == []

    @pytest.mark.asyncio
    async def test_configurable_municipality(self, upstream_records):
        service = BeachService(source=StaticSource(upstream_records), municipality="Aarhus")
        result = await service.get_beaches()
        assert [b.name for b in result.data] == ["Den Permanente"]

    @pytest.mark.asyncio
    async def test_upstream_error_propagates_unchanged(self):
        error = UpstreamStatusError(status_code=503, reason="Service Unavailable")
        service = BeachService(source=StaticSource(error=error))

        with pytest.raises(UpstreamStatusError) as exc_info:
            await service.get_beaches()
        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_processing_error_is_wrapped(self):
        service = BeachService(source=StaticSource([{"name": "A", "municipality": "København"}]))

        with patch(
            'app.services.beach_service.filter_by_municipality',
            side_effect=RuntimeError("filter exploded"),
        ):
            with pytest.raises(UpstreamError, match="filter exploded"):
                await service.get_beaches()

    @pytest.mark.asyncio
    async def test_each_call_fetches_again(self, upstream_records):
        source = StaticSource(upstream_records)
        service = BeachService(source=source)

        first = await service.get_beaches()
        second = await service.get_beaches()

        assert source.calls == 2
        assert first.model_dump()["data"] == second.model_dump()["data"]
