"""
Module: ledger_kernel.selectors.base
Responsibility: Abstract base class for read-only query selectors.
Architecture position: Kernel > Selectors.  May import from db/base.py and
    models/.  Selectors NEVER create, modify, or delete data.

Invariants enforced:
    - Read-only access: selectors accept a Session from the caller but MUST
      NOT call session.add(), session.delete(), session.commit(), or
      session.flush().
    - DTO return convention: selectors return frozen domain objects, NOT raw
      ORM instances.
    - Session ownership: the caller owns the session and its transaction
      scope.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs.  They MUST NOT mutate any data.
    """

    def __init__(self, session: Session):
        """
        Args:
            session: SQLAlchemy session for database reads.
        """
        self.session = session
