"""
DuckDuckGo Instant Answer API integration.

This subpackage provides:
- HTTP session/transport helpers and the connectivity self-test (`http.py`)
- Typed parsing of the free-form JSON response (`parse.py`)
- Query variants for organization names (`variants.py`)
- The search client with throttling/backoff policy (`search.py`)
- Result flattening into namespaced properties (`normalize.py`)

Typical usage:
    from ddgenrich.ddg.search import SearchClient
    from ddgenrich.ddg.normalize import normalize_result
"""
