"""Background scheduler and job functions."""
