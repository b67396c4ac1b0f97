"""Console application package."""
