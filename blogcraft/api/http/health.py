from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness check for load balancers and orchestrators"""
    return {"status": "ok"}
