from pydantic import BaseModel, Field
from typing import Optional

from schemas.student import StudentOut


class StudentLoginRequest(BaseModel):
    nisn: str = Field(pattern=r"^\d{10}$")


class AdminLoginRequest(BaseModel):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)


class AdminOut(BaseModel):
    username: str
    name: str


class Identity(BaseModel):
    role: str
    student: Optional[StudentOut] = None
    admin: Optional[AdminOut] = None


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Identity
