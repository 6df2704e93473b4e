"""Core constants and exceptions for Gridbook."""
