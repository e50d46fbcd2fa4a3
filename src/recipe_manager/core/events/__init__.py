"""Application lifecycle events."""

from recipe_manager.core.events.lifespan import lifespan


__all__ = ["lifespan"]
