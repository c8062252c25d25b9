"""HTTP application components for the task server."""

from taskstore.server.apps.starlette_app import TaskStarletteApplication


__all__ = ['TaskStarletteApplication']
