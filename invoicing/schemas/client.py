"""Client Schemas — create and read models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from invoicing.core.domain_types import ClientStatus


class ClientCreate(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    contact_person: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: str | None = Field(None, max_length=2000)
    status: ClientStatus = ClientStatus.ACTIVE

    @field_validator("company_name")
    @classmethod
    def strip_company_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("company_name cannot be empty or whitespace")
        return v


class ClientResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    company_name: str
    contact_person: str | None
    email: str | None
    address: str | None
    status: ClientStatus
    created_at: datetime


class ClientListResponse(BaseModel):
    clients: list[ClientResponse]
    pagination: dict


class ClientUpdate(BaseModel):
    """PUT body: every field optional; only fields sent are written."""
    company_name: str | None = Field(None, min_length=1, max_length=200)
    contact_person: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    address: str | None = Field(None, max_length=2000)
    status: ClientStatus | None = None

    @field_validator("company_name")
    @classmethod
    def strip_company_name(cls, v: str | None) -> str | None:
        if v is None:
            raise ValueError("company_name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("company_name cannot be empty or whitespace")
        return v

    @field_validator("status")
    @classmethod
    def reject_null_status(cls, v: ClientStatus | None) -> ClientStatus | None:
        if v is None:
            raise ValueError("status cannot be null")
        return v
