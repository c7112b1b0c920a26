# services/exceptions.py
"""
Domain errors raised by the service layer.

They subclass ValueError so existing callers that catch ValueError keep
working; main.py maps each one to its HTTP status code.
"""
from fastapi import status


class ServiceError(ValueError):
     """Base class; carries the HTTP status the API should answer with."""
     status_code = status.HTTP_400_BAD_REQUEST

     def __init__(self, message: str, **extra):
          super().__init__(message)
          self.message = message
          self.extra = extra


class BadRequestError(ServiceError):
     status_code = status.HTTP_400_BAD_REQUEST


class ForbiddenError(ServiceError):
     status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
     status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
     status_code = status.HTTP_409_CONFLICT


class GoneError(ServiceError):
     """An OTP or similar one-time value has expired."""
     status_code = status.HTTP_410_GONE


class UnprocessableError(ServiceError):
     status_code = 422


class ExternalServiceError(ServiceError):
     """A payment gateway, mailer or storage call failed."""
     status_code = status.HTTP_502_BAD_GATEWAY
