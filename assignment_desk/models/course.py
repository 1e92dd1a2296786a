from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from assignment_desk.db.base_class import Base
from assignment_desk.models._ids import generate_id


class Course(Base):
    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    instructor_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
