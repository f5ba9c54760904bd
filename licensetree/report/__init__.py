"""License report assembly."""
