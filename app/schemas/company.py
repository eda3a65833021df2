from pydantic import Field
from typing import List, Optional

from app.schemas.base import CamelModel, RequestModel
from app.schemas.job import JobResponse


class CompanyNew(RequestModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdate(RequestModel):
    """Partial company update; the handle cannot change. Omitted fields stay as they are, name and description cannot be nulled"""
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyFilter(RequestModel):
    """
    Typed check of GET /companies query parameters.

    Unknown keys are ignored here; the company filter builder rejects them
    with its own message.
    """
    name: Optional[str] = Field(None, min_length=1)
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)

    class Config:
        extra = "ignore"


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyResponse):
    """Company with the jobs it has posted"""
    jobs: List[JobResponse] = []


class CompanyOut(CamelModel):
    company: CompanyResponse


class CompanyDetailOut(CamelModel):
    company: CompanyDetail


class CompanyListOut(CamelModel):
    companies: List[CompanyResponse]


class CompanyDeletedOut(CamelModel):
    deleted: str
