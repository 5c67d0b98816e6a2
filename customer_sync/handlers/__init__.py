"""Queue-triggered entry points."""
