import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import ensure_admin, ensure_logged_in
from app.core.query_string import string_to_primitive_types
from app.core.validation import validate
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyNew,
    CompanyUpdate,
    CompanyFilter,
    CompanyOut,
    CompanyDetailOut,
    CompanyListOut,
    CompanyDeletedOut,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post(
    "",
    status_code=201,
    response_model=CompanyOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def create_company(request: CompanyNew, db: Session = Depends(get_db)):
    """
    Create a company.

    Authorization: login and admin
    """
    company = company_crud.create(db, request)
    logger.info(f"Created company {company['handle']}")
    return {"company": company}


@router.get("", response_model=CompanyListOut)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, optionally filtered by query string:

    - name: case-insensitive substring match
    - minEmployees / maxEmployees: inclusive bounds on headcount

    Any other parameter, or minEmployees > maxEmployees, is a 400.
    No match returns an empty list.

    Authorization: none
    """
    filters = string_to_primitive_types(dict(request.query_params))

    if filters:
        validate(filters, CompanyFilter)
        return {"companies": company_crud.find_filtered(db, filters)}

    return {"companies": company_crud.get_all(db)}


@router.get("/{handle}", response_model=CompanyDetailOut)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with its jobs.

    Authorization: none
    """
    return {"company": company_crud.get(db, handle)}


@router.patch(
    "/{handle}",
    response_model=CompanyOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def update_company(handle: str, request: CompanyUpdate, db: Session = Depends(get_db)):
    """
    Partially update a company. Fields: name, description, numEmployees, logoUrl.

    Authorization: login and admin
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete(
    "/{handle}",
    response_model=CompanyDeletedOut,
    dependencies=[Depends(ensure_logged_in), Depends(ensure_admin)],
)
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs.

    Authorization: login and admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
