"""Pure calculation components of the pool engine."""
