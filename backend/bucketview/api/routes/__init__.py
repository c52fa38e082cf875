"""API route registration."""

from fastapi import APIRouter

from bucketview.api.routes import bucket, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(bucket.router, prefix="/bucket", tags=["bucket"])
