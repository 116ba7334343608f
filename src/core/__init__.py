"""
Core Module - API routes and the caller's identity model.

Import the router from core.api; this package does not import it eagerly
so that core.models stays importable from the auth layer.
"""
