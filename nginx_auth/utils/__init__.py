"""Shared helpers for nginx-auth."""
