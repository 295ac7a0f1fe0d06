from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["home"])


@router.get("/", response_class=PlainTextResponse)
async def home_link():
    """Liveness check"""
    return "Welcome home!"
