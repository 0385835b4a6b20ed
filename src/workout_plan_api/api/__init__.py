"""HTTP API for workout plans."""
