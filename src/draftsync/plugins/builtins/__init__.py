"""Built-in plugins shipped with draftsync."""
