"""
High-level use cases for the salon portal API.

Each service module orchestrates a document store (and, for inspiration, an
outbound HTTP client) to implement the business rules. Routers call these
services instead of touching the data files directly.
"""
