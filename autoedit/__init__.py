"""autoedit package.

Idempotent, pattern-anchored insertion of snippets into existing text files:
- Five insertion modes (append, prepend, after, before, replace)
- Marker comments that keep an edit from being applied twice
- Timestamped backups and atomic writes
"""

__version__ = "1.0.0"
