from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str


class AuthResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    user: UserOut
