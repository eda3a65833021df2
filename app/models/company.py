from sqlalchemy import Column, Integer, String, Text, CheckConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base


class Company(Base):
    """
    Company identified by its handle (a short natural key such as "acme").
    """
    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True, index=True)
    name = Column(Text, unique=True, nullable=False)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)

    # Relationships
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan", passive_deletes=True)

    def __repr__(self):
        return f"<Company(handle='{self.handle}', name='{self.name}')>"
