"""Core play document models, enums and history."""
