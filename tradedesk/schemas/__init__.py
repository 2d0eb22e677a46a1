"""Pydantic schemas for persisted workspace payloads."""
