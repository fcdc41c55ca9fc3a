import posixpath

from typing import Sequence

from site_compose.config import Config
from site_compose.errors import ScriptError


class ArgParser:
    """Positional arguments of a command, naming a new resource by its title."""

    _expects = 'title'

    def __init__(self, resource_type: str, args: Sequence[str], config: Config) -> None:
        self.resource_type = resource_type
        self.args = list(args)
        self.config = config

    def validate(self) -> None:
        if not self.args:
            raise ScriptError(f'You must specify a {self.resource_type} {self._expects}.')

    @property
    def source(self) -> str:
        return self.config.source

    @property
    def title(self) -> str:
        return ' '.join(self.args)


class MovementArgParser(ArgParser):
    """Positional arguments of a command that moves an existing file."""

    _expects = 'path'

    @property
    def path(self) -> str:
        # never let the arguments escape the source directory through an absolute path
        name = ' '.join(self.args).lstrip('/')
        return posixpath.join(self.source, name).lstrip('/')
