"""Version information for budxray."""

__version__ = "budxray@0.1.0"
