"""Console rendering and prompts for the winbootstrap CLI."""
