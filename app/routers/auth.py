# app/routers/auth.py — Login entry point

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from app.config import StorageKeys

router = APIRouter()


@router.get("/login")
async def login_page(request: Request):
    """Already-authenticated visitors (auth cookie present) go straight to the dashboard."""
    if request.cookies.get(StorageKeys.TOKEN):
        return RedirectResponse("/dashboard", status_code=status.HTTP_302_FOUND)
    return {}
