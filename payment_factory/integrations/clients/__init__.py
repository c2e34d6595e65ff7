"""Payments API clients: mocks/ for development, real_http/ for the live Circle API."""
