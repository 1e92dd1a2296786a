import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# DEV defaults. Deployments override through the environment.
DATABASE_URL = os.getenv(
    "ASSIGNMENT_DESK_DATABASE_URL", f"sqlite:///{BASE_DIR}/assignment_desk.db"
)
LOG_LEVEL = os.getenv("ASSIGNMENT_DESK_LOG_LEVEL", "INFO")

# Identity tokens are minted upstream with the same shared secret
SECRET_KEY = os.getenv("ASSIGNMENT_DESK_SECRET_KEY", "change-me-in-production")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(minutes=60)

# Only this role narrows the course scope; every other role sees all courses
TEACHER_ROLE = "teacher"

# Assignment points policy
POINTS_MIN = 1
POINTS_MAX = 1000
DEFAULT_POINTS = 100

# Boards kept in memory at once; the least recently used one is dropped first
BOARD_REGISTRY_MAX = int(os.getenv("ASSIGNMENT_DESK_BOARD_REGISTRY_MAX", "256"))
