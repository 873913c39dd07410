"""
Module: ledger_kernel.db.base
Responsibility: Declarative base for the ORM records the SQL journal store
    reads.  Provides the string primary key convention and the type
    annotation map that keeps monetary columns exact.
Architecture position: Kernel > DB.  Lowest-level import target for models/.
    MUST NOT import from models/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Decimal precision: ``Decimal`` maps to Numeric(38, 9).  NEVER use float
      for monetary amounts.
    - Identifiers are strings.  Records imported from a document store keep
      their original keys; new rows get a uuid4 string.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import ClassVar
from uuid import uuid4

from sqlalchemy import Date, DateTime, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    """Default primary key for rows created locally."""
    return str(uuid4())


class Base(DeclarativeBase):
    """
    Declarative base for all ledger ORM records.

    Guarantees:
        - id is a String(64) primary key, defaulting to a uuid4 string.
        - Decimal maps to Numeric(38, 9).
        - datetime maps to DateTime(timezone=True); date maps to Date.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9, asdecimal=True),
        datetime: DateTime(timezone=True),
        date: Date,
        str: String(255),
    }

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=new_id,
    )
