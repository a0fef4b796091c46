from fastapi import Depends, Request
from sqlmodel import Session

from ..services import LedgerRepository, LedgerService
from .db import get_database, get_session

def get_ledger_service(
    request: Request,
    session: Session = Depends(get_session),
) -> LedgerService:
    repository = LedgerRepository(session)
    return LedgerService(session, get_database(request).locks, repository)
