"""Per-turn systems that keep the level's derived state current."""
