"""HTTP API for the fee liquidator."""
