import logging

import click

from dotenv import load_dotenv

from taskstore.config import Settings
from taskstore.server import TaskServer


load_dotenv()


@click.command()
@click.option('--host', 'host', default=None, help='Bind address.')
@click.option('--port', 'port', type=int, default=None, help='Listening port.')
@click.option('--log-level', 'log_level', default=None, help='Logging level.')
def main(host: str | None, port: int | None, log_level: str | None):
    """Runs the task service. Options override HOST, PORT and LOG_LEVEL."""
    settings = Settings.from_env()
    overrides = {
        key: value
        for key, value in (
            ('host', host),
            ('port', port),
            ('log_level', log_level),
        )
        if value is not None
    }
    if overrides:
        settings = Settings.model_validate(
            settings.model_dump() | overrides
        )

    logging.basicConfig(level=settings.log_level)
    logging.getLogger(__name__).info(
        f'Tasks service listening on port {settings.port}'
    )
    TaskServer().start(
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == '__main__':
    main()
