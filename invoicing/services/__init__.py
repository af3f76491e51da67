"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services receive repositories and owner_id as arguments (no globals, no lookups)
    - Core functions decide; services fetch, call the core, and persist

Design Decisions:
    - Small classes grouping related operations, one file per concern
"""
