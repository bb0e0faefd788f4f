"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to
storage only through the contracts in ``storage.base``, so the
in‑memory and SQLite backends can be swapped without changing API
handlers.
"""
