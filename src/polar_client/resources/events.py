"""Usage events."""

from typing import Any, Iterator, Sequence

from ..errors import PolarValidationError
from ..models.events import Event, EventCreate, EventName, EventsIngestResult
from ..pagination import DEFAULT_PAGE_SIZE, Page
from ..query import EventsQueryBuilder, QueryBuilder
from ..result import PolarResult
from .base import BaseResource, Payload, segment

MAX_INGEST_BATCH = 1000


class EventsResource(BaseResource):
    """
    Query recorded events and ingest new ones.

    Ingested events feed meters, which in turn drive usage-based billing.
    """

    query_builder = EventsQueryBuilder

    def list(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[Event]]:
        return self._list("events/", Event, page, limit, query, filters, timeout)

    def list_all(
        self,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> Iterator[PolarResult[Event]]:
        return self._list_all("events/", Event, query, filters, timeout)

    def list_names(
        self,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        query: QueryBuilder | None = None,
        timeout: float | None = None,
        **filters: Any,
    ) -> PolarResult[Page[EventName]]:
        """Distinct event names with occurrence counts."""
        return self._list("events/names", EventName, page, limit, query, filters, timeout)

    def get(self, event_id: str, timeout: float | None = None) -> PolarResult[Event]:
        if error := self._require(event_id=event_id):
            return PolarResult.fail(error)
        return self._get(f"events/{segment(event_id)}", Event, timeout=timeout)

    def ingest(self, events: Sequence[Payload], timeout: float | None = None) -> PolarResult[EventsIngestResult]:
        """
        Ingest a batch of events.

        Every event is validated before anything is sent; one invalid event
        fails the whole batch without a request.
        """
        if not events:
            return PolarResult.fail(PolarValidationError("events must not be empty", status_code=None))
        if len(events) > MAX_INGEST_BATCH:
            return PolarResult.fail(
                PolarValidationError(
                    f"At most {MAX_INGEST_BATCH} events can be ingested per request",
                    status_code=None,
                )
            )

        try:
            body = [self._payload(event, EventCreate) for event in events]
        except PolarValidationError as e:
            return PolarResult.fail(e)

        return self._post("events/ingest", EventsIngestResult, json={"events": body}, timeout=timeout)
