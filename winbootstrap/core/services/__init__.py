"""Core services — one module per bootstrap stage."""
