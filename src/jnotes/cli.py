"""Command-line interface for jnotes."""


import argparse
import logging
import sys
from jnotes import conf, store
from jnotes.conf import NotesConf
from jnotes.models import Note
from jnotes.store import NoteStore

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = 'Not a single note has been created yet.'

OPTIONS_HELP = """options:
  -a, --add [TITLE]
      Add a new note. The title can be specified as an argument.
      The text is read from standard input; press Ctrl+D to finish input.

  -l, --list
      Display the list of all saved notes.

  -s, --show N
      Show the full text of the note with number N.

  -d, --del N
      Delete the note with number N. Notes after it are renumbered.

  -h, --help
      Display this help."""


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def _header(number: int, note: Note) -> str:
    return f'{number:2d}. {note.display_timestamp()}  [{note.title}]'


def _add(args, ns: NoteStore) -> int:
    ns.add(args.argument or '', sys.stdin)
    return 0


def _list(args, ns: NoteStore) -> int:
    notes = ns.notes()
    if not notes:
        print(EMPTY_MESSAGE)
        return 0
    for i, note in enumerate(notes):
        print(f'{_header(i + 1, note)}\n    {note.preview()}\n')
    return 0


def _show(args, ns: NoteStore) -> int:
    number, note = ns.get(args.argument)
    print(f'{_header(number, note)}\n\n{note.text}')
    return 0


def _del(args, ns: NoteStore) -> int:
    ns.delete(args.argument)
    print(f'Note {args.argument} was deleted successfully')
    return 0


COMMANDS = {
    '-a': _add, '--add': _add,
    '-l': _list, '--list': _list,
    '-s': _show, '--show': _show,
    '-d': _del, '--del': _del,
    '-h': None, '--help': None,
}

_NUMBER_REQUIRED = {_show: 'show', _del: 'del'}


def argparser() -> argparse.ArgumentParser:
    """Builds the parser.

    The option is always the first argument and anything after it is its argument, even if it starts
    with a dash, so :func:`main` passes everything to this parser as positionals.
    """
    parser = _ArgumentParser(
        prog='jnotes',
        usage='%(prog)s <option> [argument]',
        add_help=False,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description='Keeps short notes in a JSON file under your XDG data directory.',
        epilog=OPTIONS_HELP)
    parser.add_argument('option', choices=list(COMMANDS), metavar='option',
                        help='One of the options listed below.')
    parser.add_argument('argument', nargs='?',
                        help='Title for --add, or note number for --show and --del.')
    return parser


def _error(message: str) -> None:
    print(f'ERROR: {message}', file=sys.stderr)


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    if args is None:
        args = sys.argv[1:]
    parser = argparser()
    try:
        args = parser.parse_args(['--'] + list(args))
        func = COMMANDS[args.option]
        if func in _NUMBER_REQUIRED and args.argument is None:
            parser.error(f'{_NUMBER_REQUIRED[func]} requires a note number')
    except UsageError as e:
        _error(str(e))
        parser.print_help(sys.stderr)
        return 1
    if func is None:
        parser.print_help(sys.stdout)
        return 0

    try:
        nc = NotesConf.for_user()
    except (conf.Error, OSError) as e:
        _error(str(e))
        return 1
    logging.basicConfig(level=logging.DEBUG if nc.debug else logging.WARNING,
                        format='%(name)s: %(levelname)s: %(message)s')
    logger.debug('using note store %s', nc.path)

    try:
        return func(args, NoteStore(nc))
    except store.Error as e:
        print(e.message, file=sys.stderr)
        return 1
    except (OSError, UnicodeError) as e:
        print(e, file=sys.stderr)
        return 1
