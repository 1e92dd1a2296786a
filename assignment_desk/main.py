import logging

from fastapi import FastAPI

from assignment_desk.core.config import LOG_LEVEL
from assignment_desk.core.logging_middleware import LoggingMiddleware
from assignment_desk.db.init_db import init_db
from assignment_desk.routers.assignments import router as assignments_router
from assignment_desk.routers.courses import router as courses_router

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title="Assignment Desk")

# Middleware
app.add_middleware(LoggingMiddleware)


# Health check
@app.get("/health")
def health():
    return {"status": "ok"}


# Startup event
@app.on_event("startup")
def on_startup():
    init_db()


# Include routers
app.include_router(courses_router, prefix="/courses", tags=["courses"])
app.include_router(assignments_router, prefix="/assignments", tags=["assignments"])
