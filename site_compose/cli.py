import argparse
import logging
import sys
import types

from collections.abc import Callable, Mapping
from typing import Any, Sequence

import mako.exceptions
import rich
import rich.logging
import rich.traceback
import rich_argparse

from site_compose import creation, movement
from site_compose.config import DEFAULT_CONFIG_FILE
from site_compose.errors import ScriptError


Command = Callable[[Sequence[str], Mapping[str, Any]], bool]

COMMANDS: dict[str, Command] = {
    'post': creation.post,
    'draft': creation.draft,
    'page': creation.page,
    'publish': movement.publish,
    'unpublish': movement.unpublish,
}

_HELP = {
    'post': 'create a new post',
    'draft': 'create a new draft',
    'page': 'create a new page',
    'publish': 'move a draft into the posts directory',
    'unpublish': 'move a post back into the drafts directory',
}

_CREATES = ('post', 'draft', 'page')


def mako_rich_traceback(exception: BaseException, *, width: int | None = 100) -> rich.traceback.Traceback:
    """Make a rich traceback with mako template information."""
    rich_trace = rich.traceback.Traceback.extract(type(exception), exception, exception.__traceback__)

    # ``rich.traceback.Stack`` holds the frames of each exception in the chain,
    # starting with ``exception`` itself and following causes like rich does.
    stack_exception: BaseException | None = exception
    for rich_stack in rich_trace.stacks:
        if stack_exception is None:
            break
        mako_tb = mako.exceptions.RichTraceback(stack_exception, stack_exception.__traceback__)
        for rich_frame, mako_frame in zip(rich_stack.frames, mako_tb.records):
            _, _, _, _, template_filename, template_lineno, _, _ = mako_frame
            if template_filename and template_lineno:  # it's a mako template, override the frame info
                rich_frame.filename = template_filename
                rich_frame.lineno = template_lineno
        stack_exception = stack_exception.__cause__ or stack_exception.__context__

    return rich.traceback.Traceback(rich_trace, width=width)


def _add_common_options(parser: argparse.ArgumentParser, metavar: str) -> None:
    parser.add_argument(
        'args',
        type=str,
        nargs='*',
        metavar=metavar,
    )
    parser.add_argument(
        '--force',
        '-f',
        action='store_true',
        help='overwrite the destination file if it already exists',
    )
    parser.add_argument(
        '--source',
        '-s',
        type=str,
        help='site source directory (overrides the configuration file)',
    )
    parser.add_argument(
        '--config',
        type=str,
        help=f'site configuration file (default: {DEFAULT_CONFIG_FILE})',
    )
    parser.add_argument(
        '--timestamp_format',
        type=str,
        help='strftime format of the front matter date',
    )


def main_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='site-compose',
        formatter_class=rich_argparse.RichHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest='command', required=True, metavar='command')
    for name in COMMANDS:
        subparser = subparsers.add_parser(
            name,
            help=_HELP[name],
            formatter_class=rich_argparse.RichHelpFormatter,
        )
        _add_common_options(subparser, 'title' if name in _CREATES else 'path')
        if name in ('post', 'publish'):
            subparser.add_argument(
                '--date',
                '-d',
                type=str,
                help='date to use instead of today',
            )
        if name in _CREATES:
            subparser.add_argument(
                '--extension',
                '-x',
                type=str,
                help='file extension of the new file',
            )
            subparser.add_argument(
                '--layout',
                '-l',
                type=str,
                help='layout of the new file',
            )
            subparser.add_argument(
                '--safe',
                action='store_true',
                help='transliterate the title to ASCII for the filename',
            )
    return parser


def main(cli_args: Sequence[str]) -> bool:
    parser = main_parser()
    args = parser.parse_args(cli_args)

    options = {
        key: value
        for key, value in vars(args).items()
        if key not in ('command', 'args') and value not in (None, False)
    }
    return COMMANDS[args.command](args.args, options)


def excepthook(
    type_: type[BaseException],
    value: BaseException,
    traceback: types.TracebackType | None,
) -> None:
    """Custom except hook that prints tracebacks with rich.

    It uses ``mako_rich_traceback`` to add the mako template information to the rich traceback.
    """
    rich.print(mako_rich_traceback(value))


def run() -> None:
    sys.excepthook = excepthook
    logging.basicConfig(level=logging.INFO, handlers=[rich.logging.RichHandler()])

    try:
        main(sys.argv[1:])
    except ScriptError as e:
        print(e.msg, file=sys.stderr)
        raise
