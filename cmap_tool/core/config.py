"""Configuration for cmap-tool: .env loading plus typed settings.

Load order (first wins):
  1. Existing OS environment variables, never overwritten.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Recognised variables:
  CMAP_TOOL_LOG_LEVEL       DEBUG / INFO / WARNING / ERROR (default WARNING)
  CMAP_TOOL_DEFAULT_DEPTH   1, 2, 4 or 8 (default 8), depth for `create`
  CMAP_TOOL_JSON            1/true/yes/on → JSON output by default
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from cmap_tool.core.palette import VALID_DEPTHS

logger = logging.getLogger(__name__)

ENV_PREFIX = 'CMAP_TOOL_'
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
_TRUTHY = {'1', 'true', 'yes', 'on'}


def _find_dotenv(start: Path) -> Path | None:
    """Walk up from start, return first .env found, stop at .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        # .git is a dir in a normal clone and a file in a worktree
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def _parse_dotenv(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Accepts quotes and a leading `export `."""
    result: dict[str, str] = {}
    for raw in path.read_text(encoding='utf-8').splitlines():
        line = raw.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        if line.startswith('export '):
            line = line[len('export ') :].lstrip()
        key, _, value = line.partition('=')
        key = key.strip()
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in '"\'':
            value = value[1:-1]
        elif ' #' in value:
            value = value.split(' #', 1)[0].rstrip()
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
            logger.warning('env file not found: %s', env_file)
            return None
    else:
        path = _find_dotenv(Path.cwd())
        if path is None:
            return None

    for key, value in _parse_dotenv(path).items():
        os.environ.setdefault(key, value)
    return path


@dataclass
class Settings:
    log_level: str = 'WARNING'
    default_depth: int = 8
    json_output: bool = False


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """Build Settings from CMAP_TOOL_* variables. Bad values fall back to defaults."""
    env = os.environ if environ is None else environ
    settings = Settings()

    level = env.get(f'{ENV_PREFIX}LOG_LEVEL')
    if level:
        if level.upper() in LOG_LEVELS:
            settings.log_level = level.upper()
        else:
            logger.warning('ignoring %sLOG_LEVEL=%r', ENV_PREFIX, level)

    depth = env.get(f'{ENV_PREFIX}DEFAULT_DEPTH')
    if depth:
        if depth.strip().isdigit() and int(depth) in VALID_DEPTHS:
            settings.default_depth = int(depth)
        else:
            logger.warning('ignoring %sDEFAULT_DEPTH=%r (expected 1, 2, 4 or 8)', ENV_PREFIX, depth)

    flag = env.get(f'{ENV_PREFIX}JSON')
    if flag is not None:
        settings.json_output = flag.strip().lower() in _TRUTHY

    return settings
