"""Infrastructure Layer — database, identity, logging adapters.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Storage exceptions never cross this layer untranslated (DataAccessError)

Design Decisions:
    - Adapters are constructed per request by api/dependencies.py
"""
