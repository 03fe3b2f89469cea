"""Core utilities: errors, logging, validation."""
