# routers/auth.py
"""
Registration, e-mail OTP verification and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import get_current_user
from models import User
from schemas.auth import (
     LoginRequest,
     LoginResponse,
     RegisterRequest,
     ResendOtpRequest,
     UserResponse,
     VerifyOtpRequest,
)
from services.auth_service import (
     InvalidCredentials,
     authenticate,
     create_access_token,
     register_user,
     resend_email_otp,
     verify_email_otp,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _build_user_response(user: User) -> UserResponse:
     return UserResponse(
          id=user.id,
          email=user.email,
          first_name=user.first_name,
          last_name=user.last_name,
          role=user.role,
          email_verified=user.email_verified,
          timezone=user.timezone,
          landlord_id=user.landlord.landlord_id if user.landlord else None,
          tenant_id=user.tenant.tenant_id if user.tenant else None,
     )


@router.post("/register", status_code=status.HTTP_201_CREATED, summary="Register a landlord or tenant")
def register(body: RegisterRequest, db: Session = Depends(get_session)):
     """
     Create the account and mail a 6-digit OTP. The account stays inactive
     until the OTP is verified.
     """
     user = register_user(
          db,
          first_name=body.first_name.strip(),
          last_name=body.last_name.strip(),
          email=body.email,
          password=body.password,
          role=body.role.value,
          timezone=body.timezone,
     )
     return {"message": "Registration successful. Check your email for the OTP.", "user_id": user.id}


@router.post("/verify-otp", summary="Verify the registration OTP")
def verify_otp(body: VerifyOtpRequest, db: Session = Depends(get_session)):
     user = verify_email_otp(db, body.email, body.otp)
     return {"message": "Email verified", "user": _build_user_response(user)}


@router.post("/resend-otp", summary="Send a fresh registration OTP")
def resend_otp(body: ResendOtpRequest, db: Session = Depends(get_session)):
     resend_email_otp(db, body.email)
     return {"message": "OTP resent"}


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(body: LoginRequest, db: Session = Depends(get_session)):
     try:
          user = authenticate(db, body.email, body.password)
     except InvalidCredentials:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
     return LoginResponse(token=create_access_token(user), user=_build_user_response(user))


@router.get("/me", response_model=UserResponse, summary="Current user profile")
def me(user: User = Depends(get_current_user)):
     return _build_user_response(user)
