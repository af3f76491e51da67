"""ORM Models — clients and invoices.

Invariants:
    - Both tables carry a non-null, indexed owner_id; all access is scoped by it

Design Decisions:
    - Importing this package registers every table on Base.metadata (alembic
      and the test fixtures rely on it)
"""

from invoicing.models.client import Client  # noqa: F401
from invoicing.models.invoice import Invoice  # noqa: F401
