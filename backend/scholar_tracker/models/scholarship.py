from sqlalchemy import Boolean, Column, Date, DateTime, Integer, JSON, String, Text, Index
from sqlalchemy.sql import func
from scholar_tracker.db.session import Base


class Scholarship(Base):
    __tablename__ = "scholarships"

    id = Column(Integer, primary_key=True, autoincrement=True)
    scholarship_name = Column(String, nullable=False)
    university_name = Column(String, nullable=False)
    country = Column(String, nullable=False)
    funding_type = Column(String, nullable=False)
    professor_email = Column(String, nullable=True)
    required_documents = Column(JSON, nullable=False, default=list)
    documents_done = Column(JSON, nullable=False, default=list)
    deadline = Column(Date, nullable=True)
    status = Column(String, nullable=False, default="Not Started")  # see schemas.scholarship.ScholarshipStatus
    apply_link = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    portal_signup = Column(Boolean, nullable=False, default=False)
    apply_started = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<Scholarship id={self.id} name={self.scholarship_name!r} status={self.status!r}>"


Index("ix_scholarships_deadline", Scholarship.deadline)
