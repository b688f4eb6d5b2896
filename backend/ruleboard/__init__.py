"""Rules catalog, architecture diagram and local LLM chat relay backend."""

__version__ = "0.1.0"
