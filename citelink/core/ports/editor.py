"""Host editor port interface.

The citation extension points a host document editor must expose. The
command bus calls into these from inside the editor's own update
cycle; general text editing (undo, formatting) stays with the host.
"""
from abc import ABC, abstractmethod
from typing import Optional

from citelink.core.models.citation import CitationToken


class EditorHostPort(ABC):
    """Abstract interface for the document editor hosting citations.

    Implementations: TextDocument
    """

    @abstractmethod
    def get_text_before_caret(self) -> Optional[str]:
        """Text of the caret's text run up to the caret.

        Returns:
            The text, or None when there is no active collapsed
            selection inside text
        """
        pass

    @abstractmethod
    def insert_citation(self, token: CitationToken, replace_length: int = 0) -> None:
        """Insert a token at the caret.

        Args:
            token: Token to insert
            replace_length: Characters immediately before the caret to
                replace (the partial "[2B" that triggered autocomplete)
        """
        pass

    @abstractmethod
    def replace_citation(self, old: CitationToken, new: CitationToken) -> bool:
        """Swap a token node for its updated value.

        Returns:
            True if the old token was found and replaced
        """
        pass
