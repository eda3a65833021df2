import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_logged_in
from app.core.query_string import string_to_primitive_types
from app.core.validation import validate
from app.crud import job as job_crud
from app.schemas.job import (
    JobNew,
    JobUpdate,
    JobFilter,
    JobOut,
    JobDetailOut,
    JobListOut,
    JobDeletedOut,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=201,
    response_model=JobOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def create_job(request: JobNew, db: Session = Depends(get_db)):
    """
    Create a job.

    Authorization: login and admin
    """
    job = job_crud.create(db, request)
    logger.info(f"Created job {job['id']}: {job['title']} at {job['companyHandle']}")
    return {"job": job}


@router.get("", response_model=JobListOut)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs, optionally filtered by query string:

    - title: case-insensitive substring match
    - minSalary: salary at least this much
    - hasEquity: true keeps only jobs offering non-zero equity

    A filtered search that matches nothing returns 404.

    Authorization: none
    """
    filters = string_to_primitive_types(dict(request.query_params))

    if filters:
        validate(filters, JobFilter)
        return {"jobs": job_crud.find_filtered(db, filters)}

    return {"jobs": job_crud.get_all(db)}


@router.get("/{job_id}", response_model=JobDetailOut)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a job with its company.

    Authorization: none
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch(
    "/{job_id}",
    response_model=JobOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def update_job(job_id: int, request: JobUpdate, db: Session = Depends(get_db)):
    """
    Partially update a job. Fields: title, salary, equity.

    Authorization: login and admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"job": job_crud.update(db, job_id, data)}


@router.delete(
    "/{job_id}",
    response_model=JobDeletedOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job.

    Authorization: login and admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
