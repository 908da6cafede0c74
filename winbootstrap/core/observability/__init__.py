"""Observability — logging setup and the SUCCESS level."""
