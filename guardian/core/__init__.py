"""
Core utilities shared across the Guardian API.

- configuration (env vars, feature flags)
- the error taxonomy rendered by the app's exception handlers
- cross-cutting helpers: logging, hashing/tokens, client IP checks and the
  Mobilerun HTTP adapter.

Routers and services depend on these primitives instead of reading the
environment or talking to httpx directly.
"""
