"""Session authentication for the check-in API."""
