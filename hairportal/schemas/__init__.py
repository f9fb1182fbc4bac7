"""Pydantic schemas for request payloads."""
