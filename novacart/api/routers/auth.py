# novacart/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from novacart.api.deps import get_auth_service
from novacart.data.models import UserModel
from novacart.domain.errors import AuthError, ConflictError
from novacart.domain.schemas import AuthOut, LoginIn, RegisterIn
from novacart.services.auth_service import AuthService, role_name

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_out(user: UserModel) -> dict:
    #never includes the password hash
    return {"id": user.id, "name": user.name, "email": user.email, "role": role_name(user.role)}


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    try:
        user, token = svc.register(payload.name, payload.email, payload.password)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)
    return {"message": "Registration successful", "user": _user_out(user), "token": token}


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    try:
        user, token = svc.login(payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return {"message": "Login successful", "user": _user_out(user), "token": token}
