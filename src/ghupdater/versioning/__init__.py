"""Version requests and selection."""
