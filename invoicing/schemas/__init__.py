"""Schemas — Pydantic models for API request and response boundaries.

Invariants:
    - Request models do structural validation only (types, lengths, ranges)
    - Cross-field domain rules live in core/ and run after these models parse

Design Decisions:
    - camelCase wire names via Field(alias=...) with populate_by_name, snake_case in Python
"""
