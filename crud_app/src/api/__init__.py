"""
Data Service package.

FastAPI application exposing health and CRUD endpoints for the records
collection. The app instance lives in ``src.api.main``.
"""
