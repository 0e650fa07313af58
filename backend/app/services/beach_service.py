"""
Copenhagen Beaches Proxy — Beach Service (Business Logic)
==========================================================

What:  Turns the full Danish dataset into the short Copenhagen list the device shows.
Why:   Keeps fetch → filter → project independent of HTTP so it can be tested
       with a fake data source and no ASGI app.
How:   Asks a BeachDataSource for every record, keeps the ones in the
       configured municipality, projects each to a CleanedBeachRecord and
       wraps the result in the success envelope.
Who:   Called by the GET route handler through FastAPI dependency injection.

Flow (GET /api/copenhagen-beaches):
    ┌──────────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │  Fetch       │───▶│  Filter      │───▶│  Project     │───▶│ Envelope │
    │ (DataSource) │    │ (København)  │    │ (defaults)   │    │ (200)    │
    └──────────────┘    └──────────────┘    └──────────────┘    └──────────┘

    The first failing step raises an UpstreamError; nothing after it runs.

Default Substitution:
    Text fields (name, municipality, region, status, lastUpdated) fall back
    to "Unknown" whenever the upstream value is falsy (missing, null, "").
    Coordinates fall back to 0 only when missing or null; any value that is
    present, 0 included, is passed through untouched.
"""

import logging
from typing import Any, Iterable, List, Optional

from app.config import settings
from app.exceptions import UpstreamError
from app.schemas.beach import BeachListResponse, CleanedBeachRecord, UpstreamBeachRecord
from app.services.badevand_client import badevand_client
from app.services.upstream_base import BeachDataSource

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
DEFAULT_COORDINATE = 0


def _text_or_unknown(value: Any) -> Any:
    if not value:
        return UNKNOWN
    return value


def _coordinate_or_default(value: Any) -> Any:
    if value is None:
        return DEFAULT_COORDINATE
    return value


def clean_record(record: UpstreamBeachRecord) -> CleanedBeachRecord:
    """Projects one upstream record onto the reduced, defaulted field set."""
    return CleanedBeachRecord(
        name=_text_or_unknown(record.name),
        municipality=_text_or_unknown(record.municipality),
        region=_text_or_unknown(record.region),
        latitude=_coordinate_or_default(record.latitude),
        longitude=_coordinate_or_default(record.longitude),
        status=_text_or_unknown(record.status),
        last_updated=_text_or_unknown(record.last_updated),
    )


def filter_by_municipality(
    records: Iterable[UpstreamBeachRecord], municipality: str
) -> List[UpstreamBeachRecord]:
    """
    Keeps records whose municipality equals `municipality` exactly.

    Case-sensitive, no diacritic folding: neither "københavn" nor
    "Kobenhavn" matches "København".
    """
    return [record for record in records if record.municipality == municipality]


class BeachService:
    """
    Stateless orchestrator for the beach listing.

    Args:
        source:       Where raw records come from (defaults to the badevand client)
        municipality: Exact municipality name to keep (settings.municipality)
        source_label: Value of the envelope's `source` field (settings.source_label)

    Holds no per-request state, so one instance safely serves concurrent requests.
    """

    def __init__(
        self,
        source: Optional[BeachDataSource] = None,
        municipality: Optional[str] = None,
        source_label: Optional[str] = None,
    ):
        self.source = source or badevand_client
        self.municipality = municipality or settings.municipality
        self.source_label = source_label or settings.source_label

    async def get_beaches(self) -> BeachListResponse:
        """
        Fetch, filter and project the beach list.

        Returns:
            BeachListResponse with the cleaned records in upstream order and
            a timestamp taken when the envelope is built.

        Raises:
            UpstreamError (or a subclass) on any failure. Errors raised by the
            filter or projection steps are wrapped so the caller only ever
            sees one exception family.
        """
        logger.info("Fetching beach data from %s...", self.source.host)

        all_beaches = await self.source.fetch_beaches()
        logger.info("Fetched %d total beaches", len(all_beaches))

        try:
            local_beaches = filter_by_municipality(all_beaches, self.municipality)
            logger.info("Found %d %s beaches", len(local_beaches), self.municipality)

            cleaned = [clean_record(beach) for beach in local_beaches]
        except Exception as e:
            logger.error("Failed to process beach data: %s", str(e), exc_info=True)
            raise UpstreamError(
                message=str(e) or type(e).__name__,
                context={"error_type": type(e).__name__},
            ) from e

        return BeachListResponse(
            count=len(cleaned),
            data=cleaned,
            source=self.source_label,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
beach_service = BeachService()


def get_beach_service() -> BeachService:
    """
    FastAPI dependency returning the shared BeachService.

    Tests swap it out with `app.dependency_overrides[get_beach_service]`.
    """
    return beach_service
