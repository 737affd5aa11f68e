"""HTTP API (versioned)."""
