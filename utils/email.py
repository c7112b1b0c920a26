# utils/email.py
"""
Transactional mail through the Brevo SMTP API.
"""
import logging
import os

import requests

from services.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

BREVO_URL = "https://api.brevo.com/v3/smtp/email"
BREVO_KEY = os.getenv("BREVO_API_KEY")
SENDER_EMAIL = os.getenv("MAIL_SENDER_EMAIL", "noreply@upkyp.com")
SENDER_NAME = "Upkyp"


def _send(to_email: str, subject: str, html: str):
     if not BREVO_KEY:
          raise ExternalServiceError("Mail service is not configured")

     try:
          response = requests.post(
               BREVO_URL,
               headers={
                    "api-key": BREVO_KEY,
                    "Content-Type": "application/json",
               },
               json={
                    "sender": {"name": SENDER_NAME, "email": SENDER_EMAIL},
                    "to": [{"email": to_email}],
                    "subject": subject,
                    "htmlContent": html,
               },
               timeout=10,
          )
     except requests.RequestException as e:
          logger.error("Brevo unreachable for mail to %s: %s", to_email, e)
          raise ExternalServiceError("Could not send email") from e
     if response.status_code not in (200, 201):
          logger.error("Brevo rejected mail to %s: %s", to_email, response.text)
          raise ExternalServiceError("Could not send email", provider_status=response.status_code)
     logger.info("Mail '%s' sent to %s", subject, to_email)


def send_otp_email(to_email: str, otp: str):
     _send(
          to_email,
          "Your Upkyp Verification Code",
          f"""
               <h2>Your verification code</h2>
               <h1 style="color:#1D4ED8">{otp}</h1>
               <p>This code expires in 10 minutes.</p>
          """,
     )


def send_lease_otp_email(to_email: str, otp: str, agreement_id: str, expiry_local: str, timezone: str):
     _send(
          to_email,
          "Your Upkyp Lease Signing Code",
          f"""
               <h2>Sign lease agreement {agreement_id}</h2>
               <p>Enter this code to sign the lease:</p>
               <h1 style="color:#1D4ED8">{otp}</h1>
               <p>This code expires at <b>{expiry_local}</b> ({timezone}).</p>
          """,
     )
