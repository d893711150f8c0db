"""TimeSafe delivery support assistant."""
__version__ = "1.0.0"
