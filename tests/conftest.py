from datetime import datetime, timedelta, timezone
from pathlib import Path
import pytest
from jnotes.conf import NotesConf
from jnotes.models import Note

STORE_PATH = '/data/go-notes/notes.json'

PLUS3 = timezone(timedelta(hours=3))


@pytest.fixture
def nc(fs):
    Path(STORE_PATH).parent.mkdir(parents=True)
    return NotesConf(path=STORE_PATH)


@pytest.fixture
def sample_notes():
    return [
        Note(datetime(2023, 1, 2, 9, 5, tzinfo=PLUS3), 'Groceries', 'milk\neggs'),
        Note(datetime(2023, 2, 14, 18, 30, 12, 250000, tzinfo=timezone.utc), 'Ideas',
             'A first line that is definitely longer than forty characters\nsecond'),
        Note(datetime(2023, 3, 1, 0, 0, tzinfo=PLUS3), '', ''),
    ]
