"""HTTP API for the cafe bot."""
