"""Core configuration, logging, middleware and exceptions."""
