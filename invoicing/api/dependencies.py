"""Request Dependencies — identity and repository construction per request.

Invariants:
    - get_current_owner raises UnauthenticatedError (401) when no identity resolves
    - Repositories are built from the request's AsyncSession; nothing is cached globally

Design Decisions:
    - Each collaborator is its own dependency so tests override exactly one seam
      (app.dependency_overrides[get_invoice_repository] = ...)
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from invoicing.config import get_settings
from invoicing.core.domain_types import OwnerId
from invoicing.core.errors import ErrorContext, UnauthenticatedError
from invoicing.core.repository_protocols import (
    ClientRepository, IdentityProvider, InvoiceRepository,
)
from invoicing.infrastructure.database import get_db
from invoicing.infrastructure.identity import HeaderIdentityProvider
from invoicing.infrastructure.repositories import (
    SqlClientRepository, SqlInvoiceRepository,
)


def get_identity_provider() -> IdentityProvider:
    return HeaderIdentityProvider(get_settings().identity_header)


async def get_current_owner(
    request: Request,
    identity: IdentityProvider = Depends(get_identity_provider),
) -> OwnerId:
    owner_id = identity.resolve(request.headers)
    if owner_id is None:
        raise UnauthenticatedError(
            ErrorContext(operation=f"{request.method} {request.url.path}"),
        )
    return owner_id


def get_invoice_repository(
    db: AsyncSession = Depends(get_db),
) -> InvoiceRepository:
    return SqlInvoiceRepository(db)


def get_client_repository(
    db: AsyncSession = Depends(get_db),
) -> ClientRepository:
    return SqlClientRepository(db)
