"""HTTP routers for the catalog service."""
