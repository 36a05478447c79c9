"""Data layer: models shared by persistence, services and state."""
