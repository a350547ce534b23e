from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    if await request.app.state.db.ping():
        return {"status": "ok", "database": "ok"}
    return {"status": "degraded", "database": "unavailable"}
