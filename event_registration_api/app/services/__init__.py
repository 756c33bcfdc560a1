"""
Service layer.

Each service encapsulates the business logic for one domain and talks
to the SQLite store through ``core.db``.  Services raise built-in
exceptions (``ValueError`` for missing records, ``PermissionError`` for
ownership violations) which the endpoints translate into HTTP errors.
"""
