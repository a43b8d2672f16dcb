"""Core services for a living-room media hub: settings, paths, key mapping, streaming and discovery."""

__version__ = "0.1.0"