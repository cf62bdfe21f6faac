"""
Parsers for `-e` tokens and `--env-file` files.

A token or line of the form KEY=VALUE is taken literally. A bare KEY is
looked up in the process environment and dropped when unset.
"""
import io
import os
from typing import Dict, Iterable, List, Mapping, Optional

from dotenv import dotenv_values

from ..errors import InvalidEnvError
from ..UTILS.log import get_logger

logger = get_logger(__name__)


class EnvFileParser:
    """
    Parser for environment tokens and env files.
    """
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        """
        Initializes the parser.

        :param environ: Environment used to resolve bare keys; defaults to os.environ.
        """
        self.environ = os.environ if environ is None else environ

    def parse(self, env_path: str) -> List[str]:
        """
        Parses an env file into KEY=VALUE entries.

        :param env_path: Path to the env file.
        :return: Entries in file order.
        :raises InvalidEnvError: If the file cannot be read.
        """
        try:
            with open(env_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except OSError as e:
            raise InvalidEnvError(f"Cannot read env file {env_path}: {e}") from e
        return self.parse_from_string(content)

    def parse_from_string(self, content: str) -> List[str]:
        """
        Parses env file content. Comments and blank lines are skipped,
        values are not interpolated.

        :param content: The file content.
        :return: Entries in file order.
        """
        values: Dict[str, Optional[str]] = dotenv_values(stream=io.StringIO(content), interpolate=False)
        entries = []
        for key, value in values.items():
            entry = self._resolve(key, value)
            if entry is not None:
                entries.append(entry)
        return entries

    def resolve_tokens(self, tokens: Iterable[str]) -> List[str]:
        """
        Resolves `-e` tokens into KEY=VALUE entries.

        :param tokens: Tokens like 'A=1' or 'HOME'.
        :return: Entries in token order.
        """
        entries = []
        for token in tokens:
            if '=' in token:
                key, value = token.split('=', 1)
            else:
                key, value = token, None
            entry = self._resolve(key, value)
            if entry is not None:
                entries.append(entry)
        return entries

    def _resolve(self, key: str, value: Optional[str]) -> Optional[str]:
        if not key.strip():
            raise InvalidEnvError(f"Invalid environment variable: empty name in {key}={value or ''}")
        if value is not None:
            return f"{key}={value}"
        if key in self.environ:
            return f"{key}={self.environ[key]}"
        logger.debug("Environment variable %s is not set, skipping", key)
        return None
