"""HTTP surface for a single local game session."""
