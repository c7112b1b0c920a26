# routers/payouts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_admin, require_landlord
from models import Landlord
from schemas.payout import DisburseRequest, PayoutAccountRequest, PayoutAccountResponse
from services import payout_service

router = APIRouter(tags=["payouts"])


# ---------------------------------------------------------------------------
# Landlord payout account
# ---------------------------------------------------------------------------

@router.get("/api/landlord/payout/getAccount", summary="My active payout account")
def get_account(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     account = payout_service.get_active_account(db, landlord.landlord_id)
     if not account:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No payout account found")
     return {"account": PayoutAccountResponse.model_validate(account)}


def _save_account(body: PayoutAccountRequest, db: Session, landlord: Landlord) -> dict:
     account = payout_service.save_account(
          db,
          landlord,
          payout_method=body.payout_method.value,
          account_name=body.account_name,
          account_number=body.account_number,
          bank_name=body.bank_name,
          channel_code=body.channel_code,
     )
     return {"message": "Payout account saved", "account": PayoutAccountResponse.model_validate(account)}


@router.post("/api/landlord/payout/saveAccount", summary="Save my payout account")
def save_account(
     body: PayoutAccountRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     """
     Replaces the active account. gcash and maya default their Xendit
     channel code; bank transfers must name one.
     """
     return _save_account(body, db, landlord)


@router.post("/api/landlord/payout/AddAccount", summary="Add a payout account")
def add_account(
     body: PayoutAccountRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     return _save_account(body, db, landlord)


# ---------------------------------------------------------------------------
# System admin disbursement
# ---------------------------------------------------------------------------

@router.get("/api/systemadmin/payouts/getListofPayments", summary="Confirmed payments awaiting payout")
def list_payments(
     payout_status: Optional[str] = Query(None),
     db: Session = Depends(get_session),
     admin: dict = Depends(require_admin),
):
     return {"payments": payout_service.list_confirmed_payments(db, payout_status)}


@router.post("/api/systemadmin/payouts/disburse", summary="Disburse payments to landlords")
def disburse(
     body: DisburseRequest,
     db: Session = Depends(get_session),
     admin: dict = Depends(require_admin),
):
     payouts = payout_service.disburse(db, body.payment_ids)
     return {"message": "Payout initiated", "payouts": payouts}
