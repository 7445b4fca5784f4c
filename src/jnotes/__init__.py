"""Keeps a personal list of short notes in a single JSON file.

If you installed via ``pip``, run ``jnotes -h`` to get help.
Or, run ``python3 -m jnotes -h``.

To use the Python API, look at :class:`jnotes.store.NoteStore`
"""
