"""Game rules applied when characters are created."""
