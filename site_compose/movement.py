import datetime
import logging
import pathlib
import posixpath
import re

from collections.abc import Mapping
from typing import Any, NamedTuple, Sequence

from site_compose import frontmatter
from site_compose.args import MovementArgParser
from site_compose.config import DEFAULT_DATESTAMP_FORMAT, DEFAULT_TIMESTAMP_FORMAT, Config, load_config


DRAFTS_DIR = '_drafts'
POSTS_DIR = '_posts'

_DATESTAMP_PREFIX = re.compile(r'\d{4}-\d{2}-\d{2}-')


class PublishOptions(NamedTuple):
    date: datetime.datetime | None = None
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT
    force: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any], config: Config) -> 'PublishOptions':
        date = options.get('date')
        if isinstance(date, str):
            date = frontmatter.parse_date(date)
        return cls(
            date=date,
            timestamp_format=config.timestamp_format,
            force=bool(options.get('force')),
        )


class Mover:
    """Move a content file between two directories of the site, rewriting its front matter."""

    resource_type: str
    target_type: str

    def __init__(self, parser: MovementArgParser, options: PublishOptions, cwd: pathlib.Path) -> None:
        self.__logger = logging.getLogger(str(self.__class__))
        self._parser = parser
        self._options = options
        self._cwd = cwd

    @property
    def source(self) -> str:
        return self._parser.source

    @property
    def origin(self) -> str:
        return self._parser.path

    @property
    def destination(self) -> str:
        raise NotImplementedError

    @property
    def force(self) -> bool:
        return self._options.force

    def patch(self, content: str) -> str:
        return content

    def move(self) -> bool:
        origin = self._cwd / self.origin
        destination = self._cwd / self.destination

        if not origin.is_file():
            self.__logger.warning(f"There was no {self.resource_type} found at '{self.origin}'.")
            return False
        if origin.resolve() == destination.resolve():
            self.__logger.warning(f'{self.origin} is already a {self.target_type}, not moving it onto itself')
            return False
        if destination.exists() and not self.force:
            self.__logger.warning(f'A {self.target_type} already exists at {self.destination}')
            return False

        destination.parent.mkdir(parents=True, exist_ok=True)
        content = self.patch(origin.read_text())
        self.__logger.info(f'writing to {destination}...')
        destination.write_text(content)
        self.__logger.info(f'removing {origin}...')
        origin.unlink()

        print(f'{self.resource_type.capitalize()} {self.origin} was moved to {self.destination}')
        return True


class PublishMover(Mover):
    resource_type = 'draft'
    target_type = 'post'

    def __init__(self, parser: MovementArgParser, options: PublishOptions, cwd: pathlib.Path) -> None:
        super().__init__(parser, options, cwd)
        self._date = options.date or datetime.datetime.now()

    @property
    def destination(self) -> str:
        name = posixpath.basename(self.origin)
        datestamp = self._date.strftime(DEFAULT_DATESTAMP_FORMAT)
        return posixpath.join(self.source, POSTS_DIR, f'{datestamp}-{name}')

    def patch(self, content: str) -> str:
        timestamp = frontmatter.format_timestamp(self._date, self._options.timestamp_format)
        return frontmatter.set_date(content, timestamp)


class UnpublishMover(Mover):
    resource_type = 'post'
    target_type = 'draft'

    @property
    def destination(self) -> str:
        name = _DATESTAMP_PREFIX.sub('', posixpath.basename(self.origin), count=1)
        return posixpath.join(self.source, DRAFTS_DIR, name)

    def patch(self, content: str) -> str:
        return frontmatter.remove_date(content)


def _mover(
    mover_cls: type[Mover],
    args: Sequence[str],
    options: Mapping[str, Any],
    cwd: pathlib.Path | None,
) -> bool:
    cwd = cwd or pathlib.Path.cwd()
    config = load_config(options, cwd)
    parser = MovementArgParser(mover_cls.resource_type, args, config)
    parser.validate()
    return mover_cls(parser, PublishOptions.from_mapping(options, config), cwd).move()


def publish(args: Sequence[str] = (), options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> bool:
    """Move a draft into the posts directory, stamping it with the publishing date."""
    return _mover(PublishMover, args, options, cwd)


def unpublish(args: Sequence[str] = (), options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> bool:
    """Move a post back into the drafts directory, dropping its date."""
    return _mover(UnpublishMover, args, options, cwd)
