"""Declarative Base — metadata shared by the invoicing tables and migrations."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
