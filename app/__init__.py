"""In-memory products API."""
