"""Blog API: FastAPI app, routes and middleware."""
