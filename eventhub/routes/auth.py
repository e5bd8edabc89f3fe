from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.database import get_db
from eventhub.deps.services import get_auth_service
from eventhub.schemas import LoginRequest, MessageResponse, SignupRequest, TokenResponse
from eventhub.services import AuthService

router = APIRouter(tags=["Auth"])


@router.post("/signup", response_model=MessageResponse)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    return await auth.signup(db, payload)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    return await auth.login(db, payload)
