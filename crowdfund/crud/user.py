from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from crowdfund.core.errors import ConflictError
from crowdfund.core.security import get_password_hash
from crowdfund.models.user import User

def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()

def user_exists(db: Session, email: str) -> bool:
    return get_user_by_email(db, email) is not None

def create_user(db: Session, name: str, email: str, password: str) -> User:
    db_user = User(
        name=name,
        email=email,
        hashed_password=get_password_hash(password),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Another signup with this email won the race
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(db_user)
    return db_user
