"""
Pydantic schema definitions for API payloads.

Each domain (users, films, genres, MPA ratings) defines its own
Pydantic models for request and response bodies.  Schemas are
separated from storage to decouple API representation from
persistence.
"""
