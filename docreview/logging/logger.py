import logging
import sys
from typing import TextIO


class Log:
    """Centralized logging for the review workflow.

    Keyword arguments are rendered as ``key=value`` pairs after the message so
    agent ids and providers stay greppable in plain console output.
    """

    _logger: logging.Logger = logging.getLogger("docreview")

    @classmethod
    def configure(cls, log_level: str, stream: TextIO | None = None) -> None:
        """Configure the logger with the specified level and a single stream handler.

        Output goes to stdout unless another stream is given. Calling this again
        replaces the previous handler.
        """
        cls._logger.setLevel(log_level.upper())
        for existing in list(cls._logger.handlers):
            cls._logger.removeHandler(existing)
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(cls._render(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(cls._render(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(cls._render(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(cls._render(message, fields))

    @staticmethod
    def _render(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} {pairs}"
