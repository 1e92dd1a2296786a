from fastapi import Depends
from sqlalchemy.orm import Session

from assignment_desk.db.session import SessionLocal
from assignment_desk.services.store import RemoteStore


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RemoteStore:
    return RemoteStore(db)
