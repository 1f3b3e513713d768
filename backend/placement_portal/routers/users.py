from fastapi import APIRouter, Depends

from placement_portal.dependencies import get_current_user, get_user_service, require_faculty
from placement_portal.models.user import User
from placement_portal.schemas.user import ProfileUpdate, UserResponse
from placement_portal.services.actor import Actor
from placement_portal.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        name=user.name,
        phone=user.phone,
        role=user.role,
        department=user.department,
        roll_number=user.roll_number,
        cgpa=user.cgpa,
        skills=user.skills or [],
        created_at=user.created_at,
    )


@router.get("", response_model=list[UserResponse])
def list_users(
    role: str | None = None,
    actor: Actor = Depends(require_faculty),
    users: UserService = Depends(get_user_service),
):
    return [user_to_response(u) for u in users.list_users(role)]


@router.get("/departments/{department}", response_model=list[UserResponse])
def list_department_students(
    department: str,
    actor: Actor = Depends(require_faculty),
    users: UserService = Depends(get_user_service),
):
    return [user_to_response(u) for u in users.get_users_by_department(department)]


@router.put("/profile", response_model=UserResponse)
def update_profile(
    req: ProfileUpdate,
    actor: Actor = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
):
    return user_to_response(users.update_user(actor.id, req))
