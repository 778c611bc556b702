import logging
import sys


class ConditionalFormatter(logging.Formatter):
    """
    A custom formatter that applies different format strings based on record level.
    Shows file name and line number only for ERROR and CRITICAL levels.
    """

    def __init__(self) -> None:
        self.default_fmt = "[%(levelname)s] [%(module)s] %(message)s"
        self.error_fmt = "[%(levelname)s] [%(filename)s:%(lineno)d] %(message)s"

        super().__init__(fmt=self.default_fmt)

    def format(self, record) -> str:
        original_fmt: str = self._style._fmt

        if record.levelno >= logging.ERROR:
            self._style._fmt = self.error_fmt
        else:
            self._style._fmt = self.default_fmt

        result: str = super().format(record)

        self._style._fmt = original_fmt

        return result


def setup_logger(debug: bool = False) -> None:
    """Setup logging global, stdout stays reserved for results
    """
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(ConditionalFormatter())

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        handlers=[stream_handler],
        force=True,
    )
