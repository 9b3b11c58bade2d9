"""TeamsBot: an Avengers messaging extension for chat clients."""

__version__ = "0.1.0"
