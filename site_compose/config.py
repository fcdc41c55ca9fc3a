import logging
import os.path
import pathlib

from collections.abc import Mapping
from typing import Any, NamedTuple

import yaml

from site_compose.errors import ScriptError


DEFAULT_CONFIG_FILE = '_config.yml'
DEFAULT_TIMESTAMP_FORMAT = '%Y-%m-%d'
DEFAULT_DATESTAMP_FORMAT = '%Y-%m-%d'
DEFAULT_EXTENSION = 'md'

_logger = logging.getLogger(__name__)


class Config(NamedTuple):
    source: str = ''
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    extension: str = DEFAULT_EXTENSION
    # ASCII-only filenames for new files
    safe: bool = False


def relative_source(source: str | os.PathLike[str], cwd: pathlib.Path) -> str:
    """Express the source directory relative to ``cwd``, using ``''`` for ``cwd`` itself."""
    path = pathlib.Path(source)
    if path.is_absolute():
        path = pathlib.Path(os.path.relpath(path, cwd))
    relative = path.as_posix()
    return '' if relative == '.' else relative


def _read_config_file(file: pathlib.Path) -> dict[str, Any]:
    _logger.info(f'reading configuration from {file}...')
    data = yaml.safe_load(file.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ScriptError(f'Configuration file {file} must contain a mapping')
    return data


def load_config(options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> Config:
    """Build the configuration from the site config file and the command line options.

    Command line options take precedence over the values in the file.
    """
    cwd = cwd or pathlib.Path.cwd()

    if options.get('config'):
        file = cwd / options['config']
        if not file.is_file():
            raise ScriptError(f'Configuration file not found: {options["config"]}')
        data = _read_config_file(file)
    elif (cwd / DEFAULT_CONFIG_FILE).is_file():
        data = _read_config_file(cwd / DEFAULT_CONFIG_FILE)
    else:
        data = {}

    compose = data.get('compose') or {}
    if not isinstance(compose, dict):
        raise ScriptError("The 'compose' configuration key must contain a mapping")

    source = options.get('source') or data.get('source') or ''
    return Config(
        source=relative_source(str(source), cwd),
        timestamp_format=(
            options.get('timestamp_format')
            or compose.get('timestamp_format')
            or DEFAULT_TIMESTAMP_FORMAT
        ),
        extension=str(compose.get('extension') or DEFAULT_EXTENSION).lstrip('.'),
        safe=bool(options.get('safe') or data.get('safe')),
    )
