from fastapi import APIRouter

from mock_analytics.schemas.common import MessageResponse

router = APIRouter()


@router.get("/", response_model=MessageResponse)
async def health_check():
    """Basic health check endpoint."""
    return {"message": "healthy"}
