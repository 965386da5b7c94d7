from pydantic import BaseModel, ConfigDict


class SignUpRequest(BaseModel):
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str


class AuthResponse(BaseModel):
    message: str
    user: UserResponse
    token: str


class SessionResponse(BaseModel):
    message: str
    user_id: str


class MessageResponse(BaseModel):
    message: str
