"""Unit tests for troubledocs.extract.error_codes."""

from __future__ import annotations

from troubledocs.extract.error_codes import extract_errors


class TestExtractErrors:
    def test_error_prefix_identifier(self) -> None:
        errors = extract_errors("Error: AccessDenied while calling PutObject")
        assert "AccessDenied" in errors

    def test_repeated_phrase_not_duplicated(self) -> None:
        text = "Error: AccessDenied while calling PutObject. Error: AccessDenied again."
        errors = extract_errors(text)
        assert errors.count("AccessDenied") == 1

    def test_exception_and_failure_prefixes(self) -> None:
        errors = extract_errors("exception NoSuchBucket and failure: ThrottlingException")
        assert errors[:2] == ["NoSuchBucket", "ThrottlingException"]

    def test_http_status_contributes_code(self) -> None:
        assert extract_errors("The server returned HTTP 403 Forbidden") == ["403", "Forbidden"]

    def test_vocabulary_terms(self) -> None:
        errors = extract_errors("Got Unauthorized, then InvalidRequest, then BadRequest")
        assert errors == ["Unauthorized", "InvalidRequest", "BadRequest"]

    def test_uppercase_error_identifiers(self) -> None:
        assert extract_errors("Status INTERNAL_ERROR was returned") == ["INTERNAL_ERROR"]

    def test_lowercase_error_word_is_not_an_identifier(self) -> None:
        assert extract_errors("an error occurred while reading") == []

    def test_first_seen_order_across_families(self) -> None:
        text = "SERVICE_ERROR_X seen before Error: Forbidden"
        # Family (a) runs before family (d), family (c) finds the duplicate.
        assert extract_errors(text) == ["Forbidden", "SERVICE_ERROR_X"]

    def test_empty_text(self) -> None:
        assert extract_errors("") == []
