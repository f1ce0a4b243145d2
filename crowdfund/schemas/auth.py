from pydantic import BaseModel
from typing import Optional

# Fields are optional so that missing values surface as a 400, not a 422
class SignupSchema(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class LoginSchema(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class MessageResponse(BaseModel):
    message: str

class LoginResponse(MessageResponse):
    token: str

class ProtectedResponse(MessageResponse):
    userId: int
    subjectId: int
