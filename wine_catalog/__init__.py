"""Client-side data layer for browsing, filtering and searching a wine catalog."""

__version__ = "0.1.0"
