"""Plan services: catalog, matching, generation and storage."""
