"""Route optimization, ETA projection and dispatch trigger services."""
