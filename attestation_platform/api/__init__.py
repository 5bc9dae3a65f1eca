"""HTTP surface over the Period Engine."""
