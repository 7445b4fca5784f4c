"""Reads and writes the JSON file holding all of a user's notes.

The most important class is :class:`NoteStore`.

Notes are addressed by their one-based position in the file. There is no stable identifier, so deleting a
note renumbers every note after it.
"""

from __future__ import annotations
from datetime import datetime, timezone
import json
import logging
import os
import os.path
import re
from tempfile import mkstemp
from typing import List, TextIO, Tuple
from jnotes.conf import NotesConf
from jnotes.models import Note

logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(r'[+-]?[0-9]+')


class Error(Exception):
    """Base class for errors raised by :class:`NoteStore`."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ParseError(Error):
    """Raised when the store file exists but does not contain a JSON array of notes."""
    def __init__(self, message: str, path: str, cause: BaseException = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class NoteNumberSyntaxError(Error):
    """Raised when a note number given by the user is not an integer."""
    def __init__(self, val: str):
        super().__init__(f'Cannot parse note number {val!r}: not an integer')
        self.val = val


class InvalidNoteNumber(Error):
    """Raised when a note number is outside the range of existing notes."""
    def __init__(self, number: int):
        super().__init__('Invalid note number')
        self.number = number


def parse_note_number(val: str) -> int:
    """Converts a one-based note number from the command line to an int.

    Only an optional sign followed by ASCII digits is accepted. Raises :exc:`NoteNumberSyntaxError` otherwise.
    """
    if not _NUMBER_RE.fullmatch(val):
        raise NoteNumberSyntaxError(val)
    return int(val)


def decode(data: str, path: str) -> List[Note]:
    """Parses the contents of a store file. Empty contents mean there are no notes.

    Raises :exc:`ParseError`.
    """
    if not data:
        return []
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        raise ParseError(f'Cannot parse {path}: {e}', path, e) from e
    if not isinstance(raw, list):
        raise ParseError(f'Cannot parse {path}: expected a JSON array of notes', path)
    notes = []
    for i, obj in enumerate(raw):
        try:
            notes.append(Note.from_json(obj))
        except ValueError as e:
            raise ParseError(f'Cannot parse note {i + 1} in {path}: {e}', path, e) from e
    return notes


def encode(notes: List[Note]) -> str:
    return json.dumps([n.as_json() for n in notes], indent=2, ensure_ascii=False)


class NoteStore:
    """Provides the operations on a note store file.

    Every operation loads the whole file, and operations that change anything rewrite the whole file.
    Nothing is cached between calls.

    .. attribute:: conf
       :type: jnotes.conf.NotesConf
    """

    def __init__(self, conf: NotesConf):
        self.conf = conf

    @property
    def path(self) -> str:
        return self.conf.path

    def load(self, missing_ok: bool = False) -> List[Note]:
        """Returns all notes, in order.

        If the file does not exist, returns an empty list when missing_ok is True, and otherwise
        raises :exc:`FileNotFoundError`. May raise :exc:`ParseError` or other IO-related exceptions.
        """
        try:
            with open(self.path, 'r', encoding='utf-8') as file:
                data = file.read()
        except FileNotFoundError:
            if missing_ok:
                logger.debug('%s does not exist yet', self.path)
                return []
            raise
        notes = decode(data, self.path)
        logger.debug('loaded %d notes from %s', len(notes), self.path)
        return notes

    def save(self, notes: List[Note]) -> None:
        """Replaces the contents of the store file with the given notes.

        The data is written to a temporary file in the same directory, which is then renamed over the
        store file, so an interrupted write does not leave a truncated store behind.
        """
        data = encode(notes)
        directory, filename = os.path.split(os.path.abspath(self.path))
        fd, tmp = mkstemp(prefix=f'.{filename}.', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as file:
                file.write(data)
                file.flush()
                os.fsync(file.fileno())
            os.chmod(tmp, 0o644)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.debug('saved %d notes to %s', len(notes), self.path)

    def add(self, title: str, stream: TextIO) -> Note:
        """Appends a note whose text is read from stream, and saves the store.

        The store is loaded (and validated) before anything is read from the stream. The stream is read until
        end of input; lines are joined with ``\\n`` and the final line break, if any, is dropped.
        Returns the new note.
        """
        notes = self.load(missing_ok=True)
        text = '\n'.join(line[:-1] if line.endswith('\n') else line for line in stream)
        note = Note(datetime.now(timezone.utc).astimezone(), title, text)
        notes.append(note)
        self.save(notes)
        logger.debug('added note %d', len(notes))
        return note

    def notes(self) -> List[Note]:
        """Returns all notes for listing. A missing store file just means there are no notes yet."""
        return self.load(missing_ok=True)

    def get(self, number: str) -> Tuple[int, Note]:
        """Returns the parsed one-based number and the note it refers to.

        Raises :exc:`NoteNumberSyntaxError` or :exc:`InvalidNoteNumber` if there is no such note.
        """
        notes = self.load()
        i = self._index(number, notes)
        return i + 1, notes[i]

    def delete(self, number: str) -> Note:
        """Removes the note with the given one-based number, saves the store, and returns the removed note.

        Every later note moves up by one position. Raises the same errors as :meth:`get`.
        """
        notes = self.load()
        note = notes.pop(self._index(number, notes))
        self.save(notes)
        logger.debug('deleted note %s, %d remaining', number, len(notes))
        return note

    @staticmethod
    def _index(number: str, notes: List[Note]) -> int:
        i = parse_note_number(number) - 1
        if i < 0 or i >= len(notes):
            raise InvalidNoteNumber(i + 1)
        return i
