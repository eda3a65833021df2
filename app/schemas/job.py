from pydantic import Field, field_validator
from typing import Any, List, Optional

from app.schemas.base import CamelModel, RequestModel

# Fraction between 0 and 1 written as a decimal string, e.g. "0", "0.05", "1.0"
EQUITY_PATTERN = r"^(0(\.\d+)?|1(\.0+)?)$"


class JobNew(RequestModel):
    """Schema for creating a job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(RequestModel):
    """Partial job update; id and company cannot change. title may be omitted but not nulled"""
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = Field(None, pattern=EQUITY_PATTERN)


class JobFilter(RequestModel):
    """Typed check of GET /jobs query parameters"""
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobBase(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_string(cls, v: Any) -> Optional[str]:
        """NUMERIC comes back as Decimal (PostgreSQL) or a number (SQLite)"""
        return None if v is None else str(v)


class JobResponse(JobBase):
    """Schema for job response"""
    company_handle: str


class JobCompany(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class JobDetail(JobBase):
    """Job with its company embedded"""
    company: JobCompany


class JobOut(CamelModel):
    job: JobResponse


class JobDetailOut(CamelModel):
    job: JobDetail


class JobListOut(CamelModel):
    jobs: List[JobResponse]


class JobDeletedOut(CamelModel):
    deleted: int
