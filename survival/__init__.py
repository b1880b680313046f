"""
Survival Grid - Two-player resource gathering game engine.

Players take turns moving on a grid, gathering food, water and wood.
The package provides:
- Immutable game state and a pure turn reducer
- Configurable rule variants (classic and unlock)
- Sessions that serialize moves with a countdown clock
- A framework-agnostic service with pydantic schemas
- A terminal front end
"""

__version__ = "0.1.0"
