import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from crowdfund.core.config import Settings, get_app_settings
from crowdfund.core.database import get_db
from crowdfund.core.errors import AuthError, ConflictError, InternalError, ValidationError
from crowdfund.core.security import create_access_token, get_current_subject, verify_password
from crowdfund.crud import user as crud_user
from crowdfund.schemas.auth import LoginResponse, LoginSchema, MessageResponse, ProtectedResponse, SignupSchema

router = APIRouter()
logger = structlog.get_logger(__name__)

# Same message for unknown email and wrong password
INVALID_CREDENTIALS = "Invalid email or password"

@router.post("/auth/signup", response_model=MessageResponse, status_code=201)
def signup(body: SignupSchema, db: Session = Depends(get_db)):
    if not body.name or not body.email or not body.password:
        raise ValidationError("All fields are required")

    try:
        if crud_user.user_exists(db, email=body.email):
            raise ConflictError("User already exists")
        user = crud_user.create_user(db, name=body.name, email=body.email, password=body.password)
    except SQLAlchemyError as e:
        logger.error("Signup failed", error=str(e))
        raise InternalError("Server error")

    logger.info("User signed up", user_id=user.id)
    return {"message": "Signup successful"}

@router.post("/auth/login", response_model=LoginResponse)
def login(body: LoginSchema, db: Session = Depends(get_db), settings: Settings = Depends(get_app_settings)):
    if not body.email or not body.password:
        raise ValidationError("Both fields are required")

    try:
        user = crud_user.get_user_by_email(db, email=body.email)
    except SQLAlchemyError as e:
        logger.error("Login lookup failed", error=str(e))
        raise InternalError("Server error")

    if not user or not verify_password(body.password, user.hashed_password):
        raise AuthError(INVALID_CREDENTIALS, status_code=400)

    token = create_access_token({"id": user.id}, settings.secret_key)
    return {"message": "Login successful", "token": token}

@router.get("/auth/protected", response_model=ProtectedResponse)
def protected(subject=Depends(get_current_subject)):
    return {"message": "Access granted", "userId": subject, "subjectId": subject}
