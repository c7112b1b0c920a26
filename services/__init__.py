# services/__init__.py
from .exceptions import (
     ServiceError,
     BadRequestError,
     ForbiddenError,
     NotFoundError,
     ConflictError,
     GoneError,
     UnprocessableError,
     ExternalServiceError,
)
from .billing_service import BillingService
from .ledger_service import (
     compute_transaction_hash,
     append_payment_record,
     verify_ledger_entry,
     verify_full_chain,
     GENESIS_HASH,
)

__all__ = [
     "ServiceError",
     "BadRequestError",
     "ForbiddenError",
     "NotFoundError",
     "ConflictError",
     "GoneError",
     "UnprocessableError",
     "ExternalServiceError",
     "BillingService",
     "compute_transaction_hash",
     "append_payment_record",
     "verify_ledger_entry",
     "verify_full_chain",
     "GENESIS_HASH",
]
