"""Database layer — the declarative Base. Engines and sessions live in
infrastructure/database.py."""
