from assignment_desk.db.base_class import Base  # noqa: F401

# import models so SQLAlchemy registers them on Base.metadata
from assignment_desk.models import assignment, course, submission  # noqa: F401
