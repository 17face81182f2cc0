"""Admin panel settings backend."""
