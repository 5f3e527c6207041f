"""Version information for targetencode."""

version = "0.1.0"
