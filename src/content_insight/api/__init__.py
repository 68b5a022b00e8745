"""HTTP API package: FastAPI application factory and route modules."""
