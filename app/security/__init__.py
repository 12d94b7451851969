"""Authentication helpers for privileged endpoints."""
