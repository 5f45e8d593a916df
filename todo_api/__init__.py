"""Todo App backend: a small REST API over a single tasks table."""

__version__ = "1.0.0"
