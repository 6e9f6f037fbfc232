"""Guardian Agent backend: theft-signal scoring and Mobilerun dispatch behind a small user API."""

__version__ = "0.1.0"
