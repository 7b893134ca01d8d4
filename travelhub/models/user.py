"""
User model and schemas (accounts mirrored from the identity provider)
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal
from datetime import datetime

UserRole = Literal["customer", "business", "admin"]


class UserSync(BaseModel):
    user_id: str = Field(..., min_length=1, description="Identity provider user id")
    email: EmailStr
    name: Optional[str] = None
    image_url: Optional[str] = None


class UserRoleUpdate(BaseModel):
    user_id: str = Field(..., min_length=1)
    role: str


class UserResponse(BaseModel):
    id: str = Field(alias="_id")
    user_id: str
    email: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    role: Optional[UserRole] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"populate_by_name": True}
