"""
folio-api Application Package

Directory Structure:
├── routers/           # FastAPI route handlers (projects, cron refresh, health)
├── schemas/           # Pydantic models for API responses
├── domain/            # Project entity and error hierarchy
├── runtime/           # Request-scoped environment (KV binding, injected secrets)
├── security/          # Bearer-secret check for the refresh trigger
├── services/
│   ├── github.py      # GitHub fetch layer
│   ├── projects.py    # Cache-aside read and forced refresh
│   └── cache/         # KV bindings, project/screenshot stores, fallback, factory
└── config.py          # Application configuration

Cache tiers:
1. **Request environment** (app.runtime): carries the KV binding to the factory
2. **Durable stores** (app.services.cache): project list (6h TTL) and screenshot URLs (24h TTL)
3. **Fallback stores**: no-op variants used when no binding is configured
"""
