"""
User API Schemas - Pydantic models for request/response
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, SecretStr

from src.service.cinema.domain.entity.user_entity import UserRole
from src.service.cinema.driving_adapter.http_controller.schema.common_schema import (
    PaginationResponse,
)


class CreateUserRequest(BaseModel):
    """Create user request schema"""

    model_config = ConfigDict(
        json_schema_extra={
            'example': {
                'email': 'user@example.com',
                'password': 'P@ssw0rd',
                'name': 'John Doe',
                'role': 'user',
            }
        }
    )

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=8,
        max_length=30,
        description='Password must be 8-30 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.USER


class LoginRequest(BaseModel):
    """User login request schema"""

    model_config = ConfigDict(
        json_schema_extra={'example': {'email': 'user@example.com', 'password': 'P@ssw0rd'}}
    )

    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )


class UserResponse(BaseModel):
    """User response schema"""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': 1,
                'email': 'user@example.com',
                'name': 'John Doe',
                'role': 'user',
                'is_active': True,
            }
        },
    )

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool


class AdminUserResponse(UserResponse):
    created_at: Optional[datetime] = None


class UserListResponse(BaseModel):
    users: List[AdminUserResponse]
    pagination: PaginationResponse


class UserUpdateRequest(BaseModel):
    """Admin update; omitted fields stay unchanged"""

    model_config = ConfigDict(json_schema_extra={'example': {'is_active': False, 'role': 'user'}})

    is_active: Optional[bool] = None
    role: Optional[UserRole] = None
