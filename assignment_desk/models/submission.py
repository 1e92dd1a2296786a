from sqlalchemy import Column, DateTime, String, Text, func

from assignment_desk.db.base_class import Base
from assignment_desk.models._ids import generate_id


class Submission(Base):
    __tablename__ = "submissions"

    id = Column(String(32), primary_key=True, default=generate_id)

    # no FK / cascade: deleting an assignment leaves its submissions behind
    assignment_id = Column(String(32), nullable=False, index=True)
    student_id = Column(String(64), nullable=False, index=True)

    content = Column(Text, nullable=True)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
