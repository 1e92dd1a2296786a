from sqlalchemy import Column, Date, DateTime, Integer, String, Text

from assignment_desk.core.config import DEFAULT_POINTS
from assignment_desk.db.base_class import Base
from assignment_desk.models._ids import generate_id


class Assignment(Base):
    __tablename__ = "assignments"

    id = Column(String(32), primary_key=True, default=generate_id)

    # plain equality key, no FK: the store does not enforce references
    course_id = Column(String(32), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    due_date = Column(Date, nullable=True)
    points = Column(Integer, nullable=False, default=DEFAULT_POINTS)

    # nullable: records written by other clients may carry no timestamp
    created_at = Column(DateTime(timezone=True), nullable=True)
    created_by = Column(String(64), nullable=True)
