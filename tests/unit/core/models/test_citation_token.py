"""Tests for CitationToken data model."""
import pytest

from citelink.core.exceptions import SerializationError
from citelink.core.models.citation import (
    CitationToken,
    create_citation,
    deserialize_citation,
    format_reference,
    is_valid_exhibit_ref,
    parse_reference,
    serialize_citation,
)


class TestCreateCitation:
    """Test token creation and reference derivation."""

    def test_reference_without_page(self):
        """Reference is the bare exhibit when no page is set."""
        token = create_citation("2B")
        assert token.citation_reference == "2B"
        assert token.page_number is None

    def test_reference_with_page(self):
        """Reference appends the page after a colon."""
        token = create_citation("2B", 15)
        assert token.citation_reference == "2B:15"

    def test_supplied_reference_is_authoritative(self):
        """Exhibit and page are re-read from a supplied reference."""
        token = create_citation("1A", None, citation_reference="2B:15")
        assert token.exhibit_ref == "2B"
        assert token.page_number == 15
        assert token.citation_reference == "2B:15"

    def test_non_positive_page_means_no_page(self):
        """Pages are 1-based; zero is treated as absent."""
        token = create_citation("2B", 0)
        assert token.page_number is None
        assert token.citation_reference == "2B"

    def test_direct_construction_derives_reference(self):
        """Stored reference cannot diverge even when built directly."""
        token = CitationToken(exhibit_ref="3C", page_number=4, citation_reference="9Z")
        assert token.citation_reference == "3C:4"

    def test_optional_fields(self):
        token = create_citation("2B", 15, description="Signature page", file_id="f1")
        assert token.description == "Signature page"
        assert token.file_id == "f1"


class TestTokenPresentation:

    def test_text_is_bracketed_reference(self):
        assert create_citation("2B", 15).text == "[2B:15]"

    def test_tooltip_with_description(self):
        token = create_citation("2B", description="Contract")
        assert token.tooltip() == "[2B]: Contract"

    def test_tooltip_without_description(self):
        assert create_citation("2B", 15).tooltip() == "Citation to exhibit 2B, page 15"
        assert create_citation("2B").tooltip() == "Citation to exhibit 2B"

    def test_well_formed(self):
        assert create_citation("12AB").is_well_formed is True
        assert create_citation("b2").is_well_formed is False


class TestImmutableUpdates:
    """Every update returns a new consistent token."""

    def test_with_reference_rewrites_exhibit_and_page(self):
        token = create_citation("2B", 15, file_id="f1")
        updated = token.with_reference("3C:7")
        assert updated.exhibit_ref == "3C"
        assert updated.page_number == 7
        assert updated.citation_reference == "3C:7"
        assert updated.file_id == "f1"
        # original untouched
        assert token.citation_reference == "2B:15"

    def test_with_reference_dropping_page(self):
        updated = create_citation("2B", 15).with_reference("2B")
        assert updated.page_number is None
        assert updated.citation_reference == "2B"

    def test_with_exhibit_ref(self):
        assert create_citation("2B", 15).with_exhibit_ref("4D").citation_reference == "4D:15"

    def test_with_page_number(self):
        token = create_citation("2B")
        assert token.with_page_number(9).citation_reference == "2B:9"
        assert token.with_page_number(9).with_page_number(None).citation_reference == "2B"

    def test_tokens_are_frozen(self):
        token = create_citation("2B")
        with pytest.raises(AttributeError):
            token.exhibit_ref = "3C"

    @pytest.mark.parametrize("reference", ["2B", "2B:15", "10AA:3"])
    def test_reference_consistency_after_update(self, reference):
        token = create_citation("1A").with_reference(reference)
        assert token.citation_reference == format_reference(token.exhibit_ref, token.page_number)


class TestParseReference:

    def test_plain_exhibit(self):
        assert parse_reference("2B") == ("2B", None)

    def test_exhibit_and_page(self):
        assert parse_reference("2B:15") == ("2B", 15)

    @pytest.mark.parametrize("reference", ["2B:abc", "2B:1:2", "2B:0", ":5"])
    def test_malformed_kept_whole(self, reference):
        """A reference that cannot be split is the whole exhibit, no page."""
        assert parse_reference(reference) == (reference, None)

    def test_trailing_colon_kept_whole(self):
        assert parse_reference("2B:") == ("2B:", None)


class TestSerialization:

    def test_serialized_shape(self):
        token = create_citation("2B", 15, description="Contract", file_id="f1")
        assert serialize_citation(token) == {
            "type": "citation",
            "version": 1,
            "exhibitId": "2B",
            "pageNumber": 15,
            "description": "Contract",
            "fileId": "f1",
            "citationReference": "2B:15",
        }

    def test_absent_fields_omitted(self):
        record = serialize_citation(create_citation("2B"))
        assert "pageNumber" not in record
        assert "fileId" not in record
        assert "description" not in record

    @pytest.mark.parametrize(
        "token",
        [
            create_citation("2B"),
            create_citation("2B", 15),
            create_citation("10C", 3, description="Photo of scene", file_id="f-9"),
            create_citation("2B:bad"),
            create_citation("2B:3"),
            create_citation(" 2B "),
            create_citation("2B:bad", 5),
            CitationToken(exhibit_ref=" 4D:7 "),
        ],
    )
    def test_round_trip(self, token):
        assert deserialize_citation(serialize_citation(token)) == token

    def test_malformed_stored_reference_loads(self):
        """A damaged reference never blocks loading."""
        token = deserialize_citation(
            {"type": "citation", "version": 1, "exhibitId": "2B", "citationReference": "2B:x"}
        )
        assert token.exhibit_ref == "2B:x"
        assert token.page_number is None

    def test_non_citation_record_rejected(self):
        with pytest.raises(SerializationError):
            deserialize_citation({"type": "text", "text": "hello"})


class TestExhibitGrammar:

    @pytest.mark.parametrize("ref", ["1A", "2B", "15C", "3AB"])
    def test_valid(self, ref):
        assert is_valid_exhibit_ref(ref) is True

    @pytest.mark.parametrize("ref", ["", "A1", "2b", "22", "B"])
    def test_invalid(self, ref):
        assert is_valid_exhibit_ref(ref) is False


class TestIdentityNormalization:
    """Exhibit and page are stable from creation onward."""

    def test_surrounding_whitespace_stripped(self):
        token = create_citation(" 2B ", 4)
        assert token.exhibit_ref == "2B"
        assert token.citation_reference == "2B:4"

    def test_reference_given_as_exhibit_is_split(self):
        token = create_citation("2B:3")
        assert token.exhibit_ref == "2B"
        assert token.page_number == 3
        assert token.citation_reference == "2B:3"

    def test_explicit_page_wins_over_embedded_page(self):
        token = create_citation("2B:3", 9)
        assert (token.exhibit_ref, token.page_number) == ("2B", 9)

    def test_malformed_exhibit_keeps_no_page(self):
        token = create_citation("2B:bad", 5)
        assert token.exhibit_ref == "2B:bad"
        assert token.page_number is None
        assert token.citation_reference == "2B:bad"

    def test_direct_construction_is_normalized(self):
        token = CitationToken(exhibit_ref="2B:3")
        assert (token.exhibit_ref, token.page_number, token.citation_reference) == ("2B", 3, "2B:3")

    def test_with_exhibit_ref_is_normalized(self):
        token = create_citation("1A", 15).with_exhibit_ref(" 4D ")
        assert token.exhibit_ref == "4D"
        assert token.citation_reference == "4D:15"
