"""In-memory column-store database with relational operators, joins, CSV I/O and a minimal SELECT."""

__version__ = "0.1.0"