"""File formats: maze sources, leaderboards, and turn-log schemas."""
