"""API module for Brightwire.

This module provides the HTTP API for the contact form and the admin back-office.
"""

from brightwire.api.admin import router as admin_router
from brightwire.api.app import create_app
from brightwire.api.contact import router as contact_router

__all__ = ["create_app", "admin_router", "contact_router"]
