# routers/__init__.py
from . import (
     announcements,
     applications,
     auth,
     billing,
     leases,
     maintenance,
     notifications,
     payments,
     payouts,
     pdc,
     properties,
)

ALL_ROUTERS = [
     auth.router,
     properties.router,
     applications.router,
     leases.router,
     pdc.router,
     billing.router,
     payments.router,
     payouts.router,
     maintenance.router,
     announcements.router,
     notifications.router,
]

__all__ = ["ALL_ROUTERS"]
