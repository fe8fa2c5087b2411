"""Version information for sd_dns."""

__version__ = "0.1.0"
