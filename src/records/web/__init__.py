"""Web API (FastAPI) for the records service."""
