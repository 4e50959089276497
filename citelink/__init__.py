"""Citation linking for legal case documents.

Recognizes exhibit citations typed inside a document, ranks completions,
keeps citation tokens consistent across saves, and resolves clicks to
file locations with a navigable history.
"""

__version__ = "1.0.0"
