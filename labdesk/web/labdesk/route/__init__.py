"""Route aggregation for the labdesk web application."""

from fastapi import APIRouter

from . import admin, assignment, auth, dashboard, profile, report, student

router = APIRouter()
router.include_router(auth.router)
router.include_router(dashboard.router)
router.include_router(assignment.router)
router.include_router(student.router)
router.include_router(report.router)
router.include_router(admin.router)
router.include_router(profile.router)
