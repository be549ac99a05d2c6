"""Headless Agar.io-style game engine for simulation experiments."""

__version__ = "0.1.0"

__all__ = [
    "colors",
    "engine",
    "entities",
    "game_state",
    "geometry",
    "mechanics",
    "physics",
    "player",
    "settings",
]