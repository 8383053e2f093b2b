"""
Card records service for the 启发星球 site.

Serves the quote-card and weekly-episode record sets from the upstream
table store through a per-table time-boxed cache, and exposes the
invalidation endpoints writers use after inserting new records.
"""

import json
from typing import Any, Dict, Optional

from fastapi import Query, Request
from fastapi.responses import JSONResponse

from shared.base_service import BaseService
from shared.config import ServiceConfig
from shared.errors import ParseError
from service_cards.app.adapters.airtable_client import AirtableClient
from service_cards.app.caching.cache_manager import CacheManager
from service_cards.app.domain.tables import (
    TableType,
    parse_fields,
    parse_table_type,
)


SERVICE_NAME = "cards"
SERVICE_PORT = 8020


class CardsService(BaseService):
    """Card records service implementation."""

    def __init__(
        self,
        config: Optional[ServiceConfig] = None,
        *,
        airtable_client: Optional[AirtableClient] = None,
        cache_manager: Optional[CacheManager] = None,
    ):
        super().__init__(SERVICE_NAME, SERVICE_PORT, config=config)
        self.airtable_client = airtable_client or AirtableClient.from_config(self.config, metrics=self.metrics)
        self.cache_manager = cache_manager or CacheManager(self.config.cache_ttl_seconds, metrics=self.metrics)

        @self.app.on_event("shutdown")
        async def _shutdown():
            await self.airtable_client.close()

        self._setup_records_routes()
        self._setup_cache_routes()

        # Expose service instance via app state for introspection/testing
        self.app.state.cards_service = self

    def _setup_records_routes(self):
        """Set up record read routes."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": SERVICE_NAME,
                "message": "启发星球 - Card Records Service",
                "version": "1.0.0"
            }

        @self.app.get("/api/v1/records")
        async def get_records(table_type: Optional[str] = Query(None, alias="tableType")):
            """Cached read of a table's record set."""
            return await self._serve_records(parse_table_type(table_type))

        @self.app.post("/api/v1/records")
        async def post_records(request: Request):
            """Cached read, or cache invalidation when ``invalidateCache`` is set."""
            body = await self._read_json_body(request)

            if body.get("invalidateCache"):
                # No tableType clears every table
                table_type = parse_table_type(body.get("tableType"), default=None)
                self.cache_manager.invalidate(table_type)
                return {"message": "Cache invalidated successfully"}

            return await self._serve_records(parse_table_type(body.get("tableType")))

        @self.app.api_route("/api/v1/records/uncached", methods=["GET", "POST"])
        async def get_records_uncached(request: Request):
            """Fetch submitted cards straight from upstream, optionally with custom fields."""
            fields = None
            if request.method == "POST":
                body = await self._read_json_body(request)
                fields = parse_fields(body.get("fields"))

            payload = await self.airtable_client.fetch_records_with_fields(fields)
            return JSONResponse(content=payload)

    def _setup_cache_routes(self):
        """Set up cache administration routes."""

        @self.app.post("/api/v1/cache/clear")
        async def clear_cache():
            """Clear every record cache."""
            cleared = self.cache_manager.invalidate()
            return {
                "success": True,
                "message": "Cache cleared successfully",
                "tables": [t.value for t in cleared]
            }

        @self.app.get("/api/v1/cache/stats")
        async def get_cache_stats():
            """Get cache statistics."""
            return self.cache_manager.stats()

    async def _serve_records(self, table_type: TableType) -> JSONResponse:
        """Read-through: cache hit, or fetch upstream and store on success."""
        payload, cached = await self.cache_manager.get_or_fetch(
            table_type,
            lambda: self.airtable_client.fetch_records(table_type),
        )

        return JSONResponse(
            content=payload,
            headers={
                "Cache-Control": f"max-age={int(self.cache_manager.ttl_seconds)}",
                "X-Cache": "HIT" if cached else "MISS",
            },
        )

    async def _read_json_body(self, request: Request) -> Dict[str, Any]:
        """Parse a JSON object body; an empty body reads as ``{}``."""
        raw = await request.body()
        if not raw.strip():
            return {}

        try:
            body = json.loads(raw)
        except ValueError as exc:
            raise ParseError("Request body is not valid JSON", details={"error": str(exc)}) from exc

        if not isinstance(body, dict):
            raise ParseError("Request body must be a JSON object")
        return body

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report whether the upstream table store is configured."""
        configured = bool(self.config.airtable_base_name and self.config.airtable_token)
        return {"airtable": "configured" if configured else "unconfigured"}


def create_app():
    """Create FastAPI application."""
    service = CardsService()
    return service.app


if __name__ == "__main__":
    service = CardsService()
    service.run()
