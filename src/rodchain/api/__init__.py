"""HTTP surface for rodchain."""
