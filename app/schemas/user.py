from pydantic import Field
from app.schemas.base import CamelModel

class UserCreate(CamelModel):
    email: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserLogin(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class UserResponse(CamelModel):
    id: str
    email: str
    username: str

class MessageResponse(CamelModel):
    message: str
