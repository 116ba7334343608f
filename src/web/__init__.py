"""Web layer: FastAPI application, error envelope and request dependencies."""
