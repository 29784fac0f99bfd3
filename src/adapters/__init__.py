"""Adaptadores de I/O (HTTP, render JSON)."""
