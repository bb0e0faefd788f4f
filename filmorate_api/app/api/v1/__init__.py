"""
Version 1 of the API.

This subpackage bundles the endpoints for users, films, genres and
MPA ratings.
"""
