from fastapi import APIRouter

from app.core.timeutils import utcnow
from app.database import check_db_health

router = APIRouter()


@router.get("/")
def root():
    return "Courier Track API"


@router.get("/health")
def health():
    return {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "database": check_db_health(),
    }
