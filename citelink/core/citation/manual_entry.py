"""
Manual citation dialog validation.

The toolbar dialog collects exhibit, page and description as raw
strings. Valid input becomes a fresh InsertCitationPayload; invalid
input raises ManualEntryError with one message per field.
"""
from typing import Dict, Optional, Union

from citelink.core.citation.commands import InsertCitationPayload
from citelink.core.exceptions import ManualEntryError
from citelink.core.models.citation import is_valid_exhibit_ref


def validate_manual_entry(
    exhibit: Optional[str],
    page: Optional[Union[str, int]] = None,
    description: Optional[str] = None,
) -> InsertCitationPayload:
    """
    Validate dialog fields.

    Args:
        exhibit: Exhibit reference, e.g. "2b" or "15C" (case-folded)
        page: Optional page; must be a positive integer when given
        description: Optional tooltip text

    Returns:
        InsertCitationPayload for a fresh insertion

    Raises:
        ManualEntryError: With {"exhibit": ..., "page": ...} messages
    """
    errors: Dict[str, str] = {}

    exhibit_ref = (exhibit or "").strip().upper()
    if not exhibit_ref:
        errors["exhibit"] = "Exhibit is required"
    elif not is_valid_exhibit_ref(exhibit_ref):
        errors["exhibit"] = 'Format should be like "1A", "2B", "15C"'

    page_number = None
    page_text = "" if page is None else str(page).strip()
    if page_text:
        if not page_text.isdigit() or int(page_text) < 1:
            errors["page"] = "Page number must be a positive integer"
        else:
            page_number = int(page_text)

    if errors:
        raise ManualEntryError(errors)

    return InsertCitationPayload(
        exhibit_ref=exhibit_ref,
        page_number=page_number,
        description=(description or "").strip() or None,
    )
