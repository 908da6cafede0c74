"""L0 Data — pure recipe data, no logic."""
