"""Terminal admin dashboard for Brightwire"""

from .client import AdminClient, ClientError
from .dashboard import AdminDashboard

__all__ = ["AdminClient", "ClientError", "AdminDashboard"]
