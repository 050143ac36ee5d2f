"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from fieldtrack.api.v1.routes import auth, field, activities, admin

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(field.router, prefix="/field", tags=["Field"])
api_router.include_router(activities.router, prefix="/field", tags=["Field activities"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
