"""Mocked sign-in, sign-up and profile routes"""

from fastapi import APIRouter, HTTPException, Depends

from ..database.session import EmailAlreadyRegistered, InvalidCredentials, SessionStore
from ..models.session import SessionResponse, SessionStatus, SignInRequest, SignUpRequest
from .dependencies import get_session

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.get("/session", response_model=SessionStatus)
async def get_session_status(session: SessionStore = Depends(get_session)):
    """Who is signed in on this session"""
    return session.status()


@router.post("/signin", response_model=SessionResponse)
async def sign_in(
    request: SignInRequest,
    session: SessionStore = Depends(get_session),
):
    """Sign in with the mocked account"""
    try:
        message = session.sign_in(request)
    except InvalidCredentials as e:
        raise HTTPException(status_code=401, detail=e.message)
    return SessionResponse(session=session.status(), message=message)


@router.post("/signup", response_model=SessionResponse, status_code=201)
async def sign_up(
    request: SignUpRequest,
    session: SessionStore = Depends(get_session),
):
    """Create an account and sign it in"""
    try:
        message = session.sign_up(request)
    except EmailAlreadyRegistered as e:
        raise HTTPException(status_code=409, detail=e.message)
    return SessionResponse(session=session.status(), message=message)


@router.post("/logout", response_model=SessionResponse)
async def logout(session: SessionStore = Depends(get_session)):
    """Sign out and forget the stored profile"""
    message = session.logout()
    return SessionResponse(session=session.status(), message=message)


@router.post("/avatar", response_model=SessionResponse)
async def change_avatar(session: SessionStore = Depends(get_session)):
    """Switch to the next stock profile picture"""
    message = session.change_avatar()
    if message is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    return SessionResponse(session=session.status(), message=message)
