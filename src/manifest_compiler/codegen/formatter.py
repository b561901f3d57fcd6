"""Source formatters applied after assembly."""

import asyncio
from typing import Protocol

from manifest_compiler.core import get_logger
from .errors import FormatError
from .models import FormatterConfig

logger = get_logger(__name__)


class Formatter(Protocol):
    """Formats one assembled source file."""

    async def format(self, code: str, filename: str, config: FormatterConfig) -> str: ...


class PassthroughFormatter:
    """Returns code unchanged (formatting disabled)."""

    async def format(self, code: str, filename: str, config: FormatterConfig) -> str:
        return code


def prettier_args(filename: str, config: FormatterConfig) -> list[str]:
    """CLI flags equivalent to a formatter config."""
    args = [
        "--stdin-filepath", filename,
        "--tab-width", str(config.tab_width),
        "--print-width", str(config.print_width),
        "--trailing-comma", config.trailing_comma,
    ]
    if not config.semi:
        args.append("--no-semi")
    if config.single_quote:
        args.append("--single-quote")
    if config.jsx_single_quote:
        args.append("--jsx-single-quote")
    return args


class PrettierFormatter:
    """
    Formats code with the `prettier` CLI.

    Code is piped through stdin; the filename only selects the parser.
    """

    def __init__(self, binary: str = "prettier"):
        self.binary = binary

    async def format(self, code: str, filename: str, config: FormatterConfig) -> str:
        """
        Run prettier over `code`.

        Raises:
            FormatError: If the binary is missing or exits non-zero
        """
        try:
            process = await asyncio.create_subprocess_exec(
                self.binary,
                *prettier_args(filename, config),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FormatError(f"Cannot run {self.binary}: {e}") from e

        stdout, stderr = await process.communicate(code.encode("utf-8"))
        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise FormatError(f"{self.binary} exited with {process.returncode}: {message}")

        logger.debug("code_formatted", filename=filename, size=len(stdout))
        return stdout.decode("utf-8")
