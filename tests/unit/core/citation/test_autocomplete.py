"""Tests for the autocomplete dropdown state machine."""
import pytest
from unittest.mock import MagicMock

from citelink.adapters.directory import InMemoryExhibitDirectory
from citelink.adapters.editor import TextDocument
from citelink.core.citation.autocomplete import AutocompleteStatus, CitationAutocomplete
from citelink.core.citation.commands import CitationCommandBus
from citelink.core.models.exhibit import ExhibitDirectoryEntry


@pytest.fixture
def directory():
    return InMemoryExhibitDirectory(exhibits=[
        ExhibitDirectoryEntry(exhibit_ref="2A", title="Lease", file_id="f0"),
        ExhibitDirectoryEntry(exhibit_ref="2B", title="Contract", file_id="f1"),
        ExhibitDirectoryEntry(exhibit_ref="12C", title="Invoice"),
    ])


@pytest.fixture
def doc():
    return TextDocument()


@pytest.fixture
def autocomplete(doc, directory):
    return CitationAutocomplete(CitationCommandBus(doc, directory), directory)


def type_and_notify(doc, autocomplete, text):
    doc.type_text(text)
    return autocomplete.on_text_changed(doc.get_text_before_caret())


class TestTransitions:

    def test_starts_idle(self, autocomplete):
        assert autocomplete.state.status == AutocompleteStatus.IDLE
        assert autocomplete.state.is_open is False

    def test_opens_on_partial(self, doc, autocomplete):
        state = type_and_notify(doc, autocomplete, "See [2")
        assert state.status == AutocompleteStatus.SUGGESTING
        assert [c.citation_ref for c in state.candidates] == ["2A", "2B", "12C"]
        assert state.selected_index == 0
        assert state.partial_input == "2"

    def test_bare_bracket_stays_idle(self, doc, autocomplete):
        assert type_and_notify(doc, autocomplete, "[").status == AutocompleteStatus.IDLE

    def test_no_candidates_stays_idle(self, doc, autocomplete):
        assert type_and_notify(doc, autocomplete, "[9").status == AutocompleteStatus.IDLE

    def test_lowercase_gives_no_suggestions(self, doc, autocomplete):
        assert type_and_notify(doc, autocomplete, "[2b").is_open is False

    def test_closing_bracket_closes_then_settles(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert type_and_notify(doc, autocomplete, "B]").status == AutocompleteStatus.CLOSING
        assert type_and_notify(doc, autocomplete, " ").status == AutocompleteStatus.IDLE

    def test_caret_leaving_closes(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.on_text_changed(None).is_open is False

    def test_page_separator_keeps_suggesting(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2B")
        state = type_and_notify(doc, autocomplete, ":15")
        assert state.is_open is True
        assert state.partial_page == 15

    def test_reset(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.reset().status == AutocompleteStatus.IDLE


class TestKeyboard:

    def test_arrow_keys_wrap(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.handle_key("ArrowUp") is True
        assert autocomplete.state.selected_index == 2
        autocomplete.handle_key("ArrowDown")
        assert autocomplete.state.selected_index == 0
        autocomplete.handle_key("ArrowDown")
        assert autocomplete.state.selected.citation_ref == "2B"

    def test_escape_dismisses(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.handle_key("Escape") is True
        assert autocomplete.state.status == AutocompleteStatus.CLOSING
        assert doc.citations == []

    def test_keys_ignored_when_closed(self, autocomplete):
        assert autocomplete.handle_key("Enter") is False

    def test_other_keys_pass_through(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.handle_key("a") is False
        assert autocomplete.state.is_open is True

    @pytest.mark.parametrize("key", ["Enter", "Tab"])
    def test_accept_key_inserts_selected(self, doc, autocomplete, key):
        type_and_notify(doc, autocomplete, "See [2")
        autocomplete.handle_key("ArrowDown")
        autocomplete.handle_key(key)

        assert doc.text_content == "See [2B]"
        assert doc.citations[0].file_id == "f1"
        assert autocomplete.state.is_open is False


class TestAccept:

    def test_accept_replaces_partial(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "Signed in [2")
        token = autocomplete.accept(1)

        assert token.citation_reference == "2B"
        assert token.file_id == "f1"
        assert doc.text_content == "Signed in [2B]"

    def test_accept_carries_typed_page(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2B:15")
        token = autocomplete.accept()

        assert token.citation_reference == "2B:15"
        assert doc.text_content == "[2B:15]"

    def test_accept_when_closed(self, autocomplete):
        assert autocomplete.accept() is None

    def test_accept_out_of_range(self, doc, autocomplete):
        type_and_notify(doc, autocomplete, "[2")
        assert autocomplete.accept(10) is None
        assert doc.citations == []

    def test_accept_without_selection_inserts_nothing(self, directory):
        editor = MagicMock()
        editor.get_text_before_caret.return_value = None
        autocomplete = CitationAutocomplete(CitationCommandBus(editor, directory), directory)
        autocomplete.on_text_changed("[2")

        assert autocomplete.accept() is None
        editor.insert_citation.assert_not_called()
