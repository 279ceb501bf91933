"""Tests for tag and query-value helpers."""

from snippetbox.api.errors import format_validation_errors
from snippetbox.services.pagination import MAX_OFFSET, PageRequest
from snippetbox.utils.tags import normalize_tags, parse_positive_int, parse_tag_list


class TestNormalizeTags:
    """Tests for normalize_tags."""

    def test_lowercases_trims_and_dedupes(self):
        assert normalize_tags([" Go", "go ", "CLI", "", "  "]) == ["go", "cli"]

    def test_keeps_first_seen_order(self):
        assert normalize_tags(["b", "a", "B"]) == ["b", "a"]


class TestParseTagList:
    """Tests for parse_tag_list."""

    def test_splits_on_commas(self):
        assert parse_tag_list("go, Rust,,go") == ["go", "rust"]

    def test_empty_is_no_tags(self):
        assert parse_tag_list(None) == []
        assert parse_tag_list("") == []


class TestParsePositiveInt:
    """Tests for parse_positive_int."""

    def test_valid_number(self):
        assert parse_positive_int("3", default=1) == 3

    def test_missing_uses_default(self):
        assert parse_positive_int(None, default=10) == 10

    def test_non_numeric_uses_default(self):
        assert parse_positive_int("abc", default=10) == 10

    def test_clamps_to_one(self):
        assert parse_positive_int("0", default=10) == 1
        assert parse_positive_int("-4", default=10) == 1

    def test_clamps_to_maximum(self):
        assert parse_positive_int("500", default=10, maximum=100) == 100


class TestFormatValidationErrors:
    """Tests for turning pydantic errors into messages."""

    def test_missing_field(self):
        errors = [{"type": "missing", "loc": ("body", "title"), "msg": "Field required"}]
        assert format_validation_errors(errors) == ["Title is required"]

    def test_value_error_prefix_is_stripped(self):
        errors = [
            {
                "type": "value_error",
                "loc": ("body", "content"),
                "msg": "Value error, Content cannot exceed 10000 characters",
            }
        ]
        assert format_validation_errors(errors) == ["Content cannot exceed 10000 characters"]

    def test_other_errors_are_labelled(self):
        errors = [{"type": "bool_parsing", "loc": ("body", "isPublic"), "msg": "Input should be a valid boolean"}]
        assert format_validation_errors(errors) == ["IsPublic: Input should be a valid boolean"]


class TestPageRequest:
    """Tests for PageRequest.parse."""

    def test_defaults(self):
        assert PageRequest.parse() == PageRequest(page=1, limit=10)

    def test_offset(self):
        assert PageRequest.parse("3", "20").offset == 40

    def test_oversized_page_keeps_offset_bindable(self):
        request = PageRequest.parse("99999999999999999999", "7")

        assert request.page == MAX_OFFSET // 7
        assert request.offset <= MAX_OFFSET
