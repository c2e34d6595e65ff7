"""HTTP surface of the payment factory (FastAPI)."""
