"""Defines the :class:`Note` class and the textual formats used for its fields."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
import re

_FRACTION_RE = re.compile(r'\.(\d+)')


def format_timestamp(dt: datetime) -> str:
    """Returns an RFC 3339 representation of the datetime, including its UTC offset."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat()


def parse_timestamp(val: str) -> datetime:
    """Parses timestamps written by :func:`format_timestamp`, or by other tools using the same file.

    In addition to what :meth:`datetime.fromisoformat` accepts, this handles a trailing ``Z`` and
    fractional seconds with any number of digits (anything past microseconds is dropped). Timestamps
    without an offset are assumed to be UTC.

    Raises :exc:`ValueError` if the string can't be parsed.
    """
    if not isinstance(val, str):
        raise ValueError(f'Timestamp must be a string, not {type(val).__name__}')
    if val.endswith(('Z', 'z')):
        val = val[:-1] + '+00:00'
    val = _FRACTION_RE.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), val, count=1)
    dt = datetime.fromisoformat(val)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass
class Note:
    """A single entry in the note store.

    Notes have no identifier of their own; they are addressed by their position in the store.
    """

    timestamp: datetime
    """When the note was created. Should be timezone-aware."""

    title: str = ''
    """Short free-form title, possibly empty."""

    text: str = ''
    """Body of the note. May contain newlines."""

    def as_json(self) -> dict:
        """Returns a dict representing the instance, suitable for serializing as json."""
        return {
            'Timestamp': format_timestamp(self.timestamp),
            'Title': self.title,
            'Text': self.text,
        }

    @classmethod
    def from_json(cls, obj) -> Note:
        """Inverse of :meth:`as_json`. Raises :exc:`ValueError` if obj is not a valid note."""
        if not isinstance(obj, dict):
            raise ValueError(f'Expected a note object, got {type(obj).__name__}')
        if 'Timestamp' not in obj:
            raise ValueError('Note is missing Timestamp')
        title = obj.get('Title')
        text = obj.get('Text')
        # null is written by some tools for an empty field
        title = '' if title is None else title
        text = '' if text is None else text
        if not isinstance(title, str) or not isinstance(text, str):
            raise ValueError('Note Title and Text must be strings')
        return cls(parse_timestamp(obj['Timestamp']), title, text)

    def display_timestamp(self) -> str:
        return self.timestamp.strftime('%d/%m/%Y %H:%M')

    def preview(self, max_len: int = 40) -> str:
        """Returns the first line of the text, cut to max_len characters followed by ``...`` if it is longer."""
        first_line = self.text.split('\n', 1)[0]
        if len(first_line) > max_len:
            return first_line[:max_len] + '...'
        return first_line
