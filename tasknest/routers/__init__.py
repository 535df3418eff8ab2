"""API routers for TaskNest."""
