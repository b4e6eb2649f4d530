from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence
from typing import Any

from alexandria.metadata.service.logging.configuration import (
    LoggingConfiguration,
    LogLevel,
)
from alexandria.metadata.service.logging.log import setup_logging_from_configuration
from alexandria.metadata.util.log import LoggerMixin


class Script(LoggerMixin):
    name: str

    @property
    def script_name(self) -> str:
        return getattr(self, "name", self.__class__.__name__)

    @classmethod
    def arg_parser(cls) -> argparse.ArgumentParser:
        raise NotImplementedError()

    @classmethod
    def parse_command_line(
        cls, cmd_args: Sequence[str] | None = None
    ) -> argparse.Namespace:
        return cls.arg_parser().parse_args(cmd_args)

    @staticmethod
    def add_verbosity_argument(parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-v",
            "--verbose",
            help="Increase verbosity (can be specified multiple times)",
            action="count",
            default=0,
        )

    def __init__(
        self,
        cmd_args: Sequence[str] | None = None,
        init_logging: bool = True,
    ) -> None:
        """
        :param cmd_args: Command line arguments, instead of sys.argv.
        :param init_logging: Whether to configure the root logger. Tests
            leave logging alone.
        """
        self.args = self.parse_command_line(cmd_args)
        if init_logging:
            config = LoggingConfiguration()
            verbose: int = getattr(self.args, "verbose", 0) or 0
            if verbose > 0:
                level = LogLevel.debug if verbose > 1 else LogLevel.info
                config = config.model_copy(update={"level": level})
            setup_logging_from_configuration(config)

    def run(self) -> Any:
        self.log.info(f"Running {self.script_name}")
        try:
            return self.do_run()
        except Exception as e:
            logging.error("Fatal exception while running script: %s", e, exc_info=e)
            raise

    def do_run(self) -> Any:
        raise NotImplementedError()

    @staticmethod
    def write_output(output: str | None, content: str) -> None:
        """Write to the output file, or to stdout if there isn't one.

        Output files are replaced atomically, so a failed run never leaves a
        partial file behind.
        """
        if output is None:
            print(content)
            return

        output_tmp = output + ".tmp"
        with open(output_tmp, "wb") as out:
            out.write(content.encode("utf-8"))
        os.replace(output_tmp, output)
