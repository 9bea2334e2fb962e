"""Record-keeping API for search-and-rescue dog training."""

__version__ = "0.1.0"
