"""
Card records service package for the 启发星球 site.

The service fronts the upstream table store, serving:
- Record sets: submitted quote cards and weekly episode cards
- Caching: a per-table time-boxed cache with explicit invalidation

Structure:
- app.main: FastAPI app, routes, and service wiring.
- app.adapters: HTTP client for the upstream table store.
- app.caching: Timed cache and the per-table cache manager.
- app.domain: Table types and their fixed upstream queries.
"""
