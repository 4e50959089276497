"""Host editor adapters."""
from citelink.adapters.editor.text_document import TextDocument

__all__ = ["TextDocument"]
