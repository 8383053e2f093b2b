"""
Async Airtable HTTP client used by the card records service.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Sequence, TYPE_CHECKING

import httpx

from shared.errors import UpstreamError
from shared.logging import get_logger
from ..domain.tables import TABLE_QUERIES, TableQuery, TableType

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from shared.config import BaseConfig
    from shared.metrics import MetricsCollector


class AirtableClient:
    """Fetches record sets from the Airtable list-records API."""

    def __init__(
        self,
        api_url: str,
        base_name: str,
        token: Optional[str],
        table_names: Dict[TableType, str],
        *,
        timeout: float = 10.0,
        metrics: Optional["MetricsCollector"] = None,
    ) -> None:
        self.base_url = f"{api_url.rstrip('/')}/{base_name}"
        self.table_names = dict(table_names)
        self.metrics = metrics
        self.logger = get_logger("cards.airtable")
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, headers=headers)

    @classmethod
    def from_config(cls, config: "BaseConfig", metrics: Optional["MetricsCollector"] = None) -> "AirtableClient":
        return cls(
            config.airtable_api_url,
            config.airtable_base_name,
            config.airtable_token,
            {
                TableType.CARDS: config.airtable_table_name,
                TableType.WEEKLY: config.airtable_table_name_weekly,
            },
            timeout=config.upstream_timeout_seconds,
            metrics=metrics,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def fetch_records(self, table_type: TableType) -> Dict[str, Any]:
        """Fetch the current record set for ``table_type`` using its fixed query."""
        return await self._list_records(table_type, TABLE_QUERIES[table_type])

    async def fetch_records_with_fields(self, fields: Optional[Sequence[str]] = None) -> Dict[str, Any]:
        """Fetch submitted cards with a caller-chosen field list."""
        query = TABLE_QUERIES[TableType.CARDS]
        if fields is not None:
            query = query.with_fields(fields)
        return await self._list_records(TableType.CARDS, query)

    async def _list_records(self, table_type: TableType, query: TableQuery) -> Dict[str, Any]:
        table_name = self.table_names[table_type]
        params = query.to_params()
        start = time.perf_counter()
        outcome = "error"

        try:
            response = await self._client.get(f"/{table_name}", params=params)
            if not response.is_success:
                self.logger.error(
                    "Airtable request failed",
                    table=table_type.value,
                    status_code=response.status_code,
                    response=response.text[:500],
                )
                raise UpstreamError(
                    service="airtable",
                    message=f"Airtable API error: {response.status_code}",
                    details={"table": table_type.value, "status_code": response.status_code},
                    upstream_status=response.status_code,
                )

            try:
                data = response.json()
            except ValueError as exc:
                raise UpstreamError(
                    service="airtable",
                    message="Airtable returned a non-JSON body",
                    details={"table": table_type.value},
                ) from exc

            records = flatten_records(self._records_from_body(table_type, data))
            outcome = "ok"
            self.logger.debug("Airtable records fetched", table=table_type.value, count=len(records))
            return {"records": records}
        except httpx.HTTPError as exc:
            self.logger.error("Airtable transport error", table=table_type.value, error=str(exc))
            raise UpstreamError(
                service="airtable",
                message=str(exc) or exc.__class__.__name__,
                details={"table": table_type.value},
            ) from exc
        finally:
            if self.metrics:
                self.metrics.observe_histogram(
                    "upstream_fetch_duration_seconds",
                    time.perf_counter() - start,
                    table=table_type.value,
                    outcome=outcome,
                )

    def _records_from_body(self, table_type: TableType, data: Any) -> List[Dict[str, Any]]:
        """Return ``data["records"]``, rejecting any body not shaped like a list-records reply."""
        records = data.get("records") if isinstance(data, dict) else None
        if isinstance(records, list) and all(isinstance(record, dict) for record in records):
            return records

        self.logger.error(
            "Airtable returned an unexpected body",
            table=table_type.value,
            body_type=type(data).__name__,
        )
        raise UpstreamError(
            service="airtable",
            message="Airtable returned an unexpected body",
            details={"table": table_type.value},
        )


def flatten_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Lift each record's ``fields`` up beside its ``id``."""
    flattened: List[Dict[str, Any]] = []
    for record in records:
        item: Dict[str, Any] = {"id": record.get("id")}
        item.update(record.get("fields") or {})
        flattened.append(item)
    return flattened
