"""HTTP API for the proposal maker."""
