"""
Trello job tracker bot.

Moves Trello application cards when companies reply by email, and archives
cards whose job postings were taken down.
"""

__version__ = "1.0.0"
