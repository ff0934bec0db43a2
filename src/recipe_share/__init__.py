"""Recipe sharing service with a moderation workflow."""
