"""Seeded match-three board engine for the logo matching mini-game."""
