"""Settings and logging setup."""
