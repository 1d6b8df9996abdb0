from fastapi import APIRouter, Depends
from ...db.session import Database, get_database

router = APIRouter(tags=["health"])

@router.get("/health")
def health(db: Database = Depends(get_database)):
    # StorageUnavailable is turned into a 503 by the app-level handler
    db.ping()
    return {"status": "ok"}
