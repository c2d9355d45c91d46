"""Infrastructure layer: settings, repository backends and their wiring."""
