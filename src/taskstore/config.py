"""Process settings read from the environment."""

import logging
import os

from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


class Settings(BaseModel):
    """Settings for one task server process.

    Only `PORT` is needed to run the service; `HOST` and `LOG_LEVEL` have
    defaults suitable for a container.
    """

    host: str = '0.0.0.0'
    port: int = Field(default=DEFAULT_PORT, gt=0, le=65535)
    log_level: str = 'INFO'

    @field_validator('log_level')
    @classmethod
    def known_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f'unknown log level {value!r}')
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'Settings':
        """Builds settings from `environ`, `os.environ` by default.

        Unset or empty variables fall back to the defaults.

        Raises:
            pydantic.ValidationError: If a variable cannot be converted,
              e.g. a non-numeric `PORT`.
        """
        environ = os.environ if environ is None else environ
        values = {
            field: environ[name]
            for field, name in (
                ('host', 'HOST'),
                ('port', 'PORT'),
                ('log_level', 'LOG_LEVEL'),
            )
            if environ.get(name)
        }
        settings = cls.model_validate(values)
        logger.debug(f'Loaded settings: {settings}')
        return settings
