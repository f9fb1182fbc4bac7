"""
Core utilities shared across the salon portal API.

This package hosts:
- configuration helpers (env vars, data paths, feature switches)
- cross-cutting concerns such as logging, the error hierarchy, middleware
  and rate limit helpers.

Services and routers depend on these primitives instead of reading
os.environ or building error responses themselves.
"""
