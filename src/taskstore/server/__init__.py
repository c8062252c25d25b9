from taskstore.server.server import TaskServer, create_app


__all__ = [
    'TaskServer',
    'create_app',
]
