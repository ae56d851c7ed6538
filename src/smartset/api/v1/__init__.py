"""Smart Set API v1."""
