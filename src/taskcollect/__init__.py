"""TaskCollect: merged day and week task lists from Markdown notes."""

__version__ = "0.1.0"
