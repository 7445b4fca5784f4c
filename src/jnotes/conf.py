"""Locates the note store for the current user."""

from __future__ import annotations
from dataclasses import dataclass
import os
import os.path
from pathlib import Path
from typing import Mapping, Optional

APP_DIR = 'go-notes'
"""Name of the directory holding the store, inside the XDG data directory.

This matches the directory used by earlier versions of the tool, so existing notes are picked up."""

STORE_FILENAME = 'notes.json'


class Error(Exception):
    pass


def data_home(environ: Mapping[str, str]) -> str:
    """Returns the XDG data directory: ``$XDG_DATA_HOME`` if set and non-empty, else ``~/.local/share``.

    Raises :exc:`Error` if the home directory cannot be determined.
    """
    xdg = environ.get('XDG_DATA_HOME')
    if xdg:
        return xdg
    home = environ.get('HOME')
    if not home:
        try:
            home = str(Path.home())
        except (KeyError, RuntimeError) as e:
            raise Error(f'Cannot determine home directory: {e}') from e
    return os.path.join(home, '.local', 'share')


@dataclass
class NotesConf:
    path: str
    """Path of the JSON file where notes are stored. It does not need to exist yet."""

    debug: bool = False
    """If True, the command-line tool logs what it reads and writes to stderr.
    
    Set the ``JNOTES_DEBUG`` environment variable to turn this on.
    """

    @classmethod
    def for_user(cls, environ: Optional[Mapping[str, str]] = None) -> NotesConf:
        """Builds the configuration from the environment (``os.environ`` by default).

        The directory containing the store file is created if necessary.
        Raises :exc:`Error` or :exc:`OSError` if that is not possible.
        """
        if environ is None:
            environ = os.environ
        directory = os.path.join(data_home(environ), APP_DIR)
        os.makedirs(directory, mode=0o700, exist_ok=True)
        path = os.path.join(directory, STORE_FILENAME)
        debug = environ.get('JNOTES_DEBUG', '') not in ('', '0')
        return cls(path=path, debug=debug)
