"""API v1 router aggregation."""

from fastapi import APIRouter

from forge.api.v1.endpoints import analytics, exercises, health, pr, profile, streak, workouts

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workouts.router, prefix="/workouts", tags=["workouts"])

api_router.include_router(pr.router, prefix="/pr", tags=["pr"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(streak.router, prefix="/streak", tags=["streak"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
