"""Pydantic response/request schemas."""
