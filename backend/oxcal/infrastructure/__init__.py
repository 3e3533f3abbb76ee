"""Infrastructure Layer — dataset loading and logging setup."""
