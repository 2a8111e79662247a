"""Top-level API router for the AI Leadership Growth Benchmark service.

Aggregates the feature routers; mounted under /api/v1 by the application.
"""

from fastapi import APIRouter

from leadership_benchmark.api.routes.benchmark import router as benchmark_router
from leadership_benchmark.api.routes.insights import router as insights_router
from leadership_benchmark.api.routes.notifications import router as notifications_router
from leadership_benchmark.api.routes.partners import router as partners_router

router = APIRouter()
router.include_router(benchmark_router)
router.include_router(insights_router)
router.include_router(notifications_router)
router.include_router(partners_router)
