from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruitment.core.responses import ok
from recruitment.database import get_db
from recruitment.dependencies import get_current_hr
from recruitment.models.user import User
from recruitment.repos.stats_repo import get_stats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/stats")
def dashboard_stats(
    db: Session = Depends(get_db),
    _hr: User = Depends(get_current_hr),
):
    return ok(get_stats(db))
