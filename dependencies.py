# dependencies.py
"""
Shared FastAPI dependencies: bearer-token auth and role guards.
"""
from fastapi import Depends, HTTPException, Request, status
from jose import JWTError
from sqlalchemy.orm import Session

from database import get_session
from models import Landlord, Tenant, User
from services.auth_service import decode_access_token


# Token Auth Dependency
def verify_token(request: Request) -> dict:
     auth = request.headers.get("Authorization")
     if not auth or not auth.startswith("Bearer "):
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
     token = auth.split(" ")[1]
     try:
          return decode_access_token(token)
     except JWTError:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid token")


def get_current_user(
     token: dict = Depends(verify_token),
     db: Session = Depends(get_session),
) -> User:
     user = db.query(User).filter(User.id == token.get("id")).first()
     if not user:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
     return user


def require_landlord(
     token: dict = Depends(verify_token),
     db: Session = Depends(get_session),
) -> Landlord:
     """The caller's landlord profile; 403 for any other role."""
     if token.get("role") != "landlord":
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Landlord access only")
     landlord = db.query(Landlord).filter(Landlord.user_id == token.get("id")).first()
     if not landlord:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Landlord profile not found")
     return landlord


def require_tenant(
     token: dict = Depends(verify_token),
     db: Session = Depends(get_session),
) -> Tenant:
     """The caller's tenant profile; 403 for any other role."""
     if token.get("role") != "tenant":
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tenant access only")
     tenant = db.query(Tenant).filter(Tenant.user_id == token.get("id")).first()
     if not tenant:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Tenant profile not found")
     return tenant


def require_admin(token: dict = Depends(verify_token)) -> dict:
     if token.get("role") != "admin":
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access only")
     return token
