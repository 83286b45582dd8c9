from fastapi import APIRouter, Depends, HTTPException, status, Header
from typing import Optional

from core.config import settings
from schemas.auth import AdminLoginRequest, AdminOut, Identity, LoginResponse, StudentLoginRequest
from schemas.student import StudentOut
from security import jwt as jwt_utils
from security.password import verify_admin_credentials
from services.repository import SchoolRepository, get_repository

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _admin_identity() -> Identity:
    return Identity(role="admin", admin=AdminOut(username=settings.ADMIN_USERNAME, name=settings.ADMIN_NAME))


def get_current_identity(
    repo: SchoolRepository = Depends(get_repository),
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> Identity:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    token = authorization.split(" ", 1)[1]
    try:
        payload = jwt_utils.decode_access(token)
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    role = payload.get("role")
    if role == "admin" and payload.get("sub") == settings.ADMIN_USERNAME:
        return _admin_identity()
    if role == "student":
        student = repo.get_student(payload.get("sub"))
        if student:
            return Identity(role="student", student=StudentOut.model_validate(student))
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")


def require_role(role: str):
    """Dependency to require a specific role for the current identity."""
    def _check_role(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role != role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Requires {role} role")
        return identity
    return _check_role


@router.post("/student", response_model=LoginResponse)
def login_student(data: StudentLoginRequest, repo: SchoolRepository = Depends(get_repository)):
    student = repo.get_student_by_nisn(data.nisn)
    if not student:
        raise HTTPException(status_code=400, detail="NISN not found")
    access = jwt_utils.create_access_token(student.id, "student")
    return LoginResponse(
        access_token=access,
        user=Identity(role="student", student=StudentOut.model_validate(student)),
    )


@router.post("/admin", response_model=LoginResponse)
def login_admin(data: AdminLoginRequest):
    if not verify_admin_credentials(data.username, data.password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    access = jwt_utils.create_access_token(settings.ADMIN_USERNAME, "admin")
    return LoginResponse(access_token=access, user=_admin_identity())


@router.get("/me", response_model=Identity)
def me(identity: Identity = Depends(get_current_identity)):
    return identity
