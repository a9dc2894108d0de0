# Media Inspector Package

__version__ = "0.5.0"
