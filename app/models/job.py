from sqlalchemy import Column, Integer, Text, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Job(Base):
    """
    Job posting belonging to a company.

    Equity is the fraction of ownership offered, stored as NUMERIC and
    returned to clients as a string ("0", "0.05", ...).
    """
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False, index=True)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Numeric, CheckConstraint("equity <= 1.0"))
    company_handle = Column(
        Text,
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
