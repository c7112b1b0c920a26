# services/auth_service.py
"""
Auth Service - password hashing, JWT issuing and e-mail OTP verification.
"""
import logging
import os
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from models import User, Landlord, Tenant
from services.exceptions import BadRequestError, ForbiddenError, GoneError, NotFoundError
from utils.email import send_otp_email
from utils.ids import generate_otp

logger = logging.getLogger(__name__)

SECRET_KEY = os.getenv("JWT_SECRET", "change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))
OTP_TTL_MINUTES = 10

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidCredentials(ValueError):
     pass


def hash_password(password: str) -> str:
     return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
     return pwd_context.verify(password, hashed)


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
     expire = datetime.utcnow() + timedelta(minutes=expires_minutes or ACCESS_TOKEN_EXPIRE_MINUTES)
     payload = {"id": user.id, "role": user.role, "exp": expire}
     return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
     """Raises jose.JWTError on a bad signature or expired token."""
     return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def _issue_otp(user: User) -> str:
     otp = generate_otp()
     user.pending_otp = otp
     user.otp_expires_at = datetime.utcnow() + timedelta(minutes=OTP_TTL_MINUTES)
     return otp


def register_user(
     db: Session,
     first_name: str,
     last_name: str,
     email: str,
     password: str,
     role: str,
     timezone: str = "Asia/Manila",
) -> User:
     """
     Create a user plus its landlord or tenant profile and mail an OTP.

     Raises:
          BadRequestError: If the email is already registered.
     """
     email = email.strip().lower()
     if db.query(User).filter(User.email == email).first():
          raise BadRequestError("Email is already registered")

     user = User(
          first_name=first_name,
          last_name=last_name,
          email=email,
          password=hash_password(password),
          role=role,
          timezone=timezone,
     )
     db.add(user)
     db.flush()

     if role == "landlord":
          db.add(Landlord(user_id=user.id))
     elif role == "tenant":
          db.add(Tenant(user_id=user.id))

     otp = _issue_otp(user)
     db.flush()
     send_otp_email(user.email, otp)
     logger.info("Registered %s user id=%s", role, user.id)
     return user


def verify_email_otp(db: Session, email: str, otp: str) -> User:
     user = db.query(User).filter(User.email == email.strip().lower()).first()
     if not user:
          raise NotFoundError("User not found")
     if not user.pending_otp or user.pending_otp != otp:
          raise BadRequestError("Invalid OTP")
     if user.otp_expires_at is None or user.otp_expires_at < datetime.utcnow():
          raise GoneError("OTP has expired")

     user.email_verified = True
     user.is_active = True
     user.pending_otp = None
     user.otp_expires_at = None
     logger.info("Email verified for user id=%s", user.id)
     return user


def resend_email_otp(db: Session, email: str) -> None:
     user = db.query(User).filter(User.email == email.strip().lower()).first()
     if not user:
          raise NotFoundError("User not found")
     if user.email_verified:
          raise BadRequestError("Email is already verified")
     otp = _issue_otp(user)
     db.flush()
     send_otp_email(user.email, otp)


def authenticate(db: Session, email: str, password: str) -> User:
     """
     Raises:
          InvalidCredentials: Unknown email or wrong password.
          ForbiddenError: Email not yet verified.
     """
     user = db.query(User).filter(User.email == email.strip().lower()).first()
     if not user or not verify_password(password, user.password):
          raise InvalidCredentials("Invalid credentials")
     if not user.email_verified:
          raise ForbiddenError("Email is not verified")
     return user
