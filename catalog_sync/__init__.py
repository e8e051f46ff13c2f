"""Translation catalog synchronizer.

Fills keys missing from a target language catalog with machine translations
of the source catalog and writes a report of what was added.
"""

__version__ = "0.3.0"
