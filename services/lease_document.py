# services/lease_document.py
"""
Renders the lease agreement document (HTML) that both parties sign.
"""
from html import escape
from typing import Optional

from models import LeaseAgreement


def _peso(amount) -> str:
     return f"₱{float(amount or 0):,.2f}"


def _clause(title: str, body: Optional[str]) -> str:
     if not body:
          return ""
     return f"<h3>{escape(title)}</h3><p>{escape(body)}</p>"


def render_lease_html(
     lease: LeaseAgreement,
     landlord_name: str,
     tenant_name: str,
     pet_policy: Optional[str] = None,
     maintenance_responsibility: Optional[str] = None,
     additional_terms: Optional[str] = None,
) -> str:
     unit = lease.unit
     prop = unit.property
     title = "Commercial Lease Agreement" if lease.lease_type == "commercial" else "Residential Lease Agreement"

     return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>{title}</title></head>
<body style="font-family:Arial, sans-serif; max-width:800px; margin:auto;">
     <h1 style="text-align:center">{title}</h1>
     <p><b>Agreement ID:</b> {escape(lease.agreement_id)}</p>
     <p>This agreement is entered into by <b>{escape(landlord_name)}</b> (Lessor)
     and <b>{escape(tenant_name)}</b> (Lessee) for
     <b>{escape(prop.property_name)}</b>, Unit <b>{escape(unit.unit_name)}</b>,
     {escape(prop.address)}.</p>

     <h3>Term</h3>
     <p>From {lease.start_date:%B %d, %Y} to {lease.end_date:%B %d, %Y}.</p>

     <h3>Rent and Payments</h3>
     <ul>
          <li>Monthly rent: {_peso(lease.rent_amount)}, due every day {lease.billing_due_day} of the month</li>
          <li>Grace period: {lease.grace_period_days} day(s)</li>
          <li>Late payment penalty: {_peso(lease.late_penalty_amount)}</li>
          <li>Security deposit: {_peso(lease.security_deposit_amount)}</li>
          <li>Advance payment: {_peso(lease.advance_payment_amount)}</li>
     </ul>
     {_clause("Pet Policy", pet_policy)}
     {_clause("Maintenance", maintenance_responsibility)}
     {_clause("Additional Terms", additional_terms)}

     <h3>Signatures</h3>
     <p>Both parties sign this agreement electronically with a one-time code
     sent to their registered e-mail address.</p>
</body>
</html>"""
