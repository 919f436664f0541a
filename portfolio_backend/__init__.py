"""
Backend package for the portfolio website.

This package provides a FastAPI application exposing generic CRUD endpoints
over the portfolio tables, with storage, database and mail abstractions so
the service can run against real backends or in-memory doubles.
"""
