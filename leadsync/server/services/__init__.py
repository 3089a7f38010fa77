"""FastAPI dependency providers for the Leadsync server."""
