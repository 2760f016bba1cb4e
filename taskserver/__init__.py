"""Task Server - HTTP service for tasks with tags and due dates."""

__version__ = "1.0.0"
