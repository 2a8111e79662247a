"""Pydantic request/response schemas for the benchmark API."""
