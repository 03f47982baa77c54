"""Health Probe: process liveness plus MongoDB connectivity.

Invariants:
    - GET /api/health always returns 200 while the process is up
    - mongodb is "connected" only when a ping succeeds right now
"""

from fastapi import APIRouter, Depends

from showroom.api.dependencies import get_mongo_manager
from showroom.infrastructure.database import MongoClientManager

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check(
    manager: MongoClientManager | None = Depends(get_mongo_manager),
):
    """Liveness probe with store connectivity."""
    connected = await manager.health_check() if manager else False
    return {
        "status": "ok",
        "mongodb": "connected" if connected else "disconnected",
    }
