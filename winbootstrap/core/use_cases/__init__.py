"""Use cases — the top-level flows the CLI runs."""
