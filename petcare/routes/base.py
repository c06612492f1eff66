from fastapi import APIRouter, Depends, HTTPException

from .. import __version__
from ..db import Database
from .common import get_db

router = APIRouter()

@router.get("/health")
def health(db: Database = Depends(get_db)):
    if not db.ping():
        raise HTTPException(status_code=503, detail="database unreachable")
    return {"status": "ok"}

@router.get("/version")
def version():
    return {"app": "petcare-api", "version": __version__}
