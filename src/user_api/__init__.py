"""User resource API.

A small FastAPI service exposing CRUD operations over a single User table,
with field validation and JSON envelopes around every single-entity response.
"""

__version__ = "0.1.0"
