from fastapi import APIRouter, Depends

from placement_portal.dependencies import get_current_user, get_user_service
from placement_portal.models.user import User
from placement_portal.routers.users import user_to_response
from placement_portal.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from placement_portal.schemas.user import UserResponse
from placement_portal.services.actor import Actor
from placement_portal.services.user_service import UserService
from placement_portal.utils.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(user.id, user.email, user.role)
    return AuthResponse(user=user_to_response(user), token=token)


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(req: RegisterRequest, users: UserService = Depends(get_user_service)):
    return _auth_response(users.create_user(req))


@router.post("/login", response_model=AuthResponse)
def login(req: LoginRequest, users: UserService = Depends(get_user_service)):
    return _auth_response(users.authenticate(req.email, req.password))


@router.get("/me", response_model=UserResponse)
def me(actor: Actor = Depends(get_current_user), users: UserService = Depends(get_user_service)):
    return user_to_response(users.get_user(actor.id))
