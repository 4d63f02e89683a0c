"""Game-state and bot-targeting engine."""
