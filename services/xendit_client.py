# services/xendit_client.py
"""
Thin Xendit REST client: invoices for tenant checkout, transaction fee
lookup for webhook reconciliation, and payouts to landlords.
"""
import base64
import logging
import os
from typing import Optional

import requests

from services.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

XENDIT_BASE_URL = os.getenv("XENDIT_BASE_URL", "https://api.xendit.co")
XENDIT_SECRET_KEY = os.getenv("XENDIT_SECRET_KEY")
XENDIT_DISBURSE_SECRET_KEY = os.getenv("XENDIT_DISBURSE_SECRET_KEY") or XENDIT_SECRET_KEY
XENDIT_WEBHOOK_TOKEN = os.getenv("XENDIT_WEBHOOK_TOKEN")
APP_BASE_URL = os.getenv("APP_BASE_URL", "https://upkyp.com")

TIMEOUT = 15


def _xendit_headers(secret: Optional[str], idempotency_key: Optional[str] = None) -> dict:
     auth = base64.b64encode(f"{secret or ''}:".encode()).decode()
     headers = {
          "Content-Type": "application/json",
          "Authorization": f"Basic {auth}"
     }
     if idempotency_key:
          headers["Idempotency-key"] = idempotency_key
     return headers


def create_invoice(external_id: str, amount: float, payer_email: Optional[str], description: str) -> dict:
     payload = {
          "external_id": external_id,
          "amount": amount,
          "currency": "PHP",
          "description": description,
          "success_redirect_url": f"{APP_BASE_URL}/pages/tenant/billing?payment=success",
          "failure_redirect_url": f"{APP_BASE_URL}/pages/tenant/billing?payment=failed",
     }
     if payer_email:
          payload["payer_email"] = payer_email

     response = requests.post(
          f"{XENDIT_BASE_URL}/v2/invoices",
          json=payload,
          headers=_xendit_headers(XENDIT_SECRET_KEY),
          timeout=TIMEOUT,
     )
     if response.status_code not in (200, 201):
          logger.error("Xendit invoice creation failed for %s: %s", external_id, response.text)
          raise ExternalServiceError("Failed to create payment invoice")
     return response.json()


def fetch_transaction_fees(payment_id: str) -> dict:
     """
     Look up the settled transaction for a payment and return its fee
     breakdown as {gross_amount, net_amount, gateway_fee, gateway_vat}.
     Returns an empty dict when Xendit has no transaction yet.
     """
     response = requests.get(
          f"{XENDIT_BASE_URL}/transactions",
          params={"payment_id": payment_id},
          headers=_xendit_headers(XENDIT_SECRET_KEY),
          timeout=TIMEOUT,
     )
     if response.status_code != 200:
          logger.warning("Xendit transaction lookup failed for %s: %s", payment_id, response.text)
          return {}

     data = response.json().get("data") or []
     if not data:
          return {}
     tx = data[0]
     fee = tx.get("fee") or {}
     return {
          "gross_amount": tx.get("amount"),
          "net_amount": tx.get("net_amount"),
          "gateway_fee": fee.get("xendit_fee"),
          "gateway_vat": fee.get("value_added_tax"),
     }


def create_payout(
     reference_id: str,
     channel_code: str,
     account_number: str,
     account_holder_name: str,
     amount: float,
     description: str,
     metadata: Optional[dict] = None,
) -> dict:
     payload = {
          "reference_id": reference_id,
          "channel_code": channel_code,
          "channel_properties": {
               "account_number": account_number,
               "account_holder_name": account_holder_name,
          },
          "amount": amount,
          "currency": "PHP",
          "description": description,
          "metadata": metadata or {},
     }
     response = requests.post(
          f"{XENDIT_BASE_URL}/v2/payouts",
          json=payload,
          headers=_xendit_headers(XENDIT_DISBURSE_SECRET_KEY, idempotency_key=reference_id),
          timeout=TIMEOUT,
     )
     if response.status_code not in (200, 201):
          logger.error("Xendit payout %s failed: %s", reference_id, response.text)
          raise ExternalServiceError(f"Payout failed: {response.text}")
     return response.json()
