from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from scholar_tracker.db.session import get_db
from scholar_tracker.schemas.scholarship import (
    CountryCount,
    DashboardRead,
    ScholarshipCreate,
    ScholarshipRead,
    ScholarshipUpdate,
    StatusCount,
    UpcomingDeadline,
)
from scholar_tracker.services.aggregation import summarize
from scholar_tracker.services.storage import ScholarshipStorage

router = APIRouter()


def get_storage(db: Session = Depends(get_db)) -> ScholarshipStorage:
    return ScholarshipStorage(db)


@router.get("/scholarships", response_model=List[ScholarshipRead])
def list_scholarships(storage: ScholarshipStorage = Depends(get_storage)):
    return storage.list()


@router.get("/scholarships/{scholarship_id}", response_model=ScholarshipRead)
def get_scholarship(scholarship_id: int, storage: ScholarshipStorage = Depends(get_storage)):
    scholarship = storage.get(scholarship_id)
    if scholarship is None:
        raise HTTPException(status_code=404, detail="Scholarship not found")
    return scholarship


@router.post("/scholarships", response_model=ScholarshipRead, status_code=201)
def create_scholarship(payload: ScholarshipCreate, storage: ScholarshipStorage = Depends(get_storage)):
    return storage.create(payload.model_dump())


@router.put("/scholarships/{scholarship_id}", response_model=ScholarshipRead)
def update_scholarship(
    scholarship_id: int,
    payload: ScholarshipUpdate,
    storage: ScholarshipStorage = Depends(get_storage),
):
    # NotFoundError from the store is rendered as 404 by the app's handler
    return storage.update(scholarship_id, payload.changes())


@router.delete("/scholarships/{scholarship_id}", status_code=204)
def delete_scholarship(scholarship_id: int, storage: ScholarshipStorage = Depends(get_storage)):
    if not storage.delete(scholarship_id):
        raise HTTPException(status_code=404, detail="Scholarship not found")
    return Response(status_code=204)


@router.get("/dashboard", response_model=DashboardRead)
def dashboard(
    as_of: Optional[datetime] = Query(None, description="Evaluation instant; defaults to now"),
    storage: ScholarshipStorage = Depends(get_storage),
):
    stats = summarize(storage.list(), as_of or datetime.now())
    return DashboardRead(
        total=stats.total,
        accepted_count=stats.accepted_count,
        applied_count=stats.applied_count,
        pending_count=stats.pending_count,
        status_breakdown=[StatusCount(name=name, value=value) for name, value in stats.status_breakdown],
        country_breakdown=[CountryCount(name=name, count=count) for name, count in stats.country_breakdown],
        upcoming_deadlines=[
            UpcomingDeadline(
                id=item.record.id,
                scholarship_name=item.record.scholarship_name,
                university_name=item.record.university_name,
                country=item.record.country,
                deadline=item.deadline,
                days_left=item.days_left,
                urgent=item.urgent,
            )
            for item in stats.upcoming_deadlines
        ],
    )
