"""Application layer: use cases built on the credential core."""
