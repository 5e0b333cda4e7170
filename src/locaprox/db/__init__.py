"""SQLite store access."""
