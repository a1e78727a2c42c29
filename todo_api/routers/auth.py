import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from todo_api.database import get_db
from todo_api.errors import AuthError, StoreError, ValidationError
from todo_api.models.user import User
from todo_api.schemas.user import LoginRequest, TokenResponse, UserCreate
from todo_api.utils.auth import create_token, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(user: UserCreate, db: Session = Depends(get_db)):
    try:
        hashed = hash_password(user.password)
    except ValueError as e:
        # map hashing/validation errors to a 400 so client gets a clear message
        raise ValidationError(str(e))

    new_user = User(username=user.username, email=user.email, password_hash=hashed)
    try:
        exists = db.query(User).filter(or_(User.email == user.email, User.username == user.username)).first()
        if exists:
            raise ValidationError("User already exists")
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
    except IntegrityError as e:
        # a concurrent signup won the unique constraint
        db.rollback()
        logger.info("signup lost a race on a unique column: %s", e)
        raise ValidationError("User already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("store error while signing up: %s", e)
        raise StoreError(str(e)) from e

    logger.info("registered user %s", new_user.id)
    return {"token": create_token(new_user.id, new_user.username), "user": new_user}


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == credentials.email).first()
    if not db_user or not verify_password(credentials.password, db_user.password_hash):
        raise AuthError("Invalid credentials")

    return {"token": create_token(db_user.id, db_user.username), "user": db_user}
