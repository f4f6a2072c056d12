"""draftsync — keep draft status in step across a post's translations."""

__version__ = "1.2.0"
