"""segconv CLI commands."""
