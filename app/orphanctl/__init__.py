"""orphanctl - orphan file detection and cleanup for table storage locations."""

__version__ = "0.1.0"
