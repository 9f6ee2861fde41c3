"""Settings for kml-restyler, read from the environment and .env files.

Load order (first wins):
  1. Existing OS environment variables. These are never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  KML_RESTYLER_POLICY     colour policy name (default: discovered)
  KML_RESTYLER_INDENT     spaces per indentation level in output (default: 2)
  KML_RESTYLER_LOG_LEVEL  logging level name or number (default: WARNING)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from kml_restyler.core.log import parse_level

ENV_PREFIX = 'KML_RESTYLER_'

# The one policy applied when nothing else is configured
DEFAULT_POLICY = 'discovered'
DEFAULT_INDENT = 2
DEFAULT_LOG_LEVEL = 'WARNING'


@dataclass(frozen=True)
class Settings:
    policy: str = DEFAULT_POLICY
    indent: int = DEFAULT_INDENT
    log_level: int | str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from os.environ (or the given mapping).

        Raises ValueError for a non-numeric or negative indent, or an
        unknown log level.
        """
        env = os.environ if environ is None else environ
        policy = env.get(f'{ENV_PREFIX}POLICY', '').strip() or DEFAULT_POLICY
        indent = _parse_indent(env.get(f'{ENV_PREFIX}INDENT', str(DEFAULT_INDENT)))
        log_level = parse_level(env.get(f'{ENV_PREFIX}LOG_LEVEL', DEFAULT_LOG_LEVEL))
        return cls(policy=policy, indent=indent, log_level=log_level)


def _parse_indent(raw: str) -> int:
    try:
        indent = int(raw.strip())
    except ValueError:
        raise ValueError(f'{ENV_PREFIX}INDENT must be an integer, got {raw!r}') from None
    if indent < 0:
        raise ValueError(f'{ENV_PREFIX}INDENT must not be negative, got {indent}')
    return indent


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git can be a dir (normal clone) or file (worktree)
        if (current / '.git').exists():
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse a .env file into a dict. Handles KEY=value and KEY="value"."""
    result: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.startswith('export '):
            line = line[len('export ') :]
        if '=' not in line:
            continue
        key, _, raw_value = line.partition('=')
        key = key.strip()
        value = raw_value.strip().strip('"').strip("'")
        if key:
            result[key] = value
    return result


def load_env(env_file: str | None = None) -> Path | None:
    """Load .env into os.environ for keys not already set.

    Returns the path that was loaded, or None if no .env was found/used.
    """
    if env_file:
        path = Path(env_file)
        if not path.is_file():
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        if key not in os.environ:
            os.environ[key] = value

    return path
