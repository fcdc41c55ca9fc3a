import datetime
import logging
import pathlib
import posixpath
import re
import unicodedata

from collections.abc import Mapping
from typing import Any, Sequence

import mako.lookup

from site_compose import frontmatter
from site_compose.args import ArgParser
from site_compose.config import DEFAULT_DATESTAMP_FORMAT, Config, load_config
from site_compose.errors import ScriptError
from site_compose.movement import DRAFTS_DIR, POSTS_DIR


TEMPLATES = pathlib.Path(__file__).parent / 'templates'

_SAFE_SLUG_SEPARATORS = re.compile(r'[^a-z0-9]+')
_SLUG_SEPARATORS = re.compile(r'[\W_]+')


def slugify(title: str, safe: bool = False) -> str:
    """Turn a title into a filename.

    In safe mode the slug is transliterated to ASCII, otherwise letters from any
    script are kept.
    """
    if safe:
        ascii_title = unicodedata.normalize('NFKD', title).encode('ascii', 'ignore').decode()
        return _SAFE_SLUG_SEPARATORS.sub('-', ascii_title.lower()).strip('-')
    return _SLUG_SEPARATORS.sub('-', unicodedata.normalize('NFKC', title).lower()).strip('-')


class FileCreator:
    """Render a template into a new content file under the site source directory."""

    resource_type: str

    def __init__(
        self,
        parser: ArgParser,
        options: Mapping[str, Any],
        cwd: pathlib.Path,
        templates: mako.lookup.TemplateLookup | None = None,
    ) -> None:
        self.__logger = logging.getLogger(str(self.__class__))
        self._parser = parser
        self._options = options
        self._cwd = cwd
        self._templates = templates or mako.lookup.TemplateLookup(directories=[TEMPLATES])

    @property
    def config(self) -> Config:
        return self._parser.config

    @property
    def slug(self) -> str:
        slug = slugify(self._parser.title, self.config.safe)
        if not slug:
            raise ScriptError(f'The {self.resource_type} title must contain letters or digits: {self._parser.title!r}')
        return slug

    @property
    def extension(self) -> str:
        return str(self._options.get('extension') or self.config.extension).lstrip('.')

    @property
    def layout(self) -> str:
        return self._options.get('layout') or 'post'

    @property
    def directory(self) -> str:
        return ''

    @property
    def filename(self) -> str:
        return f'{self.slug}.{self.extension}'

    @property
    def path(self) -> str:
        return posixpath.join(self.config.source, self.directory, self.filename)

    def render_args(self) -> dict[str, Any]:
        return {
            'layout': frontmatter.scalar(self.layout),
            'title': frontmatter.scalar(self._parser.title),
        }

    def create(self) -> bool:
        file = self._cwd / self.path
        if file.exists() and not self._options.get('force'):
            self.__logger.warning(f'A {self.resource_type} already exists at {self.path}')
            return False

        content = self._templates.get_template(f'{self.resource_type}.mako').render(**self.render_args())
        file.parent.mkdir(parents=True, exist_ok=True)
        self.__logger.info(f'writing to {file}...')
        file.write_text(content)
        print(f'New {self.resource_type} created at {self.path}.')
        return True


class PostCreator(FileCreator):
    resource_type = 'post'

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        date = self._options.get('date')
        if isinstance(date, str):
            date = frontmatter.parse_date(date)
        self._date = date or datetime.datetime.now()

    @property
    def directory(self) -> str:
        return POSTS_DIR

    @property
    def filename(self) -> str:
        return f'{self._date.strftime(DEFAULT_DATESTAMP_FORMAT)}-{super().filename}'

    def render_args(self) -> dict[str, Any]:
        args = super().render_args()
        args['date'] = frontmatter.format_timestamp(self._date, self.config.timestamp_format)
        return args


class DraftCreator(FileCreator):
    resource_type = 'draft'

    @property
    def directory(self) -> str:
        return DRAFTS_DIR


class PageCreator(FileCreator):
    resource_type = 'page'

    @property
    def layout(self) -> str:
        return self._options.get('layout') or 'page'


def _create(
    creator_cls: type[FileCreator],
    args: Sequence[str],
    options: Mapping[str, Any],
    cwd: pathlib.Path | None,
) -> bool:
    cwd = cwd or pathlib.Path.cwd()
    parser = ArgParser(creator_cls.resource_type, args, load_config(options, cwd))
    parser.validate()
    return creator_cls(parser, options, cwd).create()


def post(args: Sequence[str] = (), options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> bool:
    """Create a dated post in the posts directory."""
    return _create(PostCreator, args, options, cwd)


def draft(args: Sequence[str] = (), options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> bool:
    return _create(DraftCreator, args, options, cwd)


def page(args: Sequence[str] = (), options: Mapping[str, Any] = {}, cwd: pathlib.Path | None = None) -> bool:
    return _create(PageCreator, args, options, cwd)
