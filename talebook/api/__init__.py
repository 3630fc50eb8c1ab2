"""HTTP API for tales."""
