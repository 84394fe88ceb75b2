"""HTTP API for assignflow."""
