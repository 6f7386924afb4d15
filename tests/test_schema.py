"""
Tests for import row validation.
"""

import pytest
from jobmatch.schema import validate_import


class TestValidateImport:
    """Test validation of bulk import rows."""

    def test_valid_row(self, import_row):
        """Valid row should have no errors."""
        assert validate_import(import_row) == []

    def test_minimal_row(self):
        data = {"title": "Engineer", "company_name": "Acme", "description": "Build things"}
        assert validate_import(data) == []

    def test_missing_required_field(self):
        """Missing required field should error."""
        data = {"title": "Engineer", "description": "Build things"}
        errors = validate_import(data)
        assert any("company_name" in err for err in errors)

    def test_empty_string_field(self):
        """Blank required field should error."""
        data = {"title": "   ", "company_name": "Acme", "description": "x"}
        errors = validate_import(data)
        assert any("title" in err for err in errors)

    def test_not_an_object(self):
        assert validate_import(["title"]) == ["Row must be a JSON object"]

    def test_skills_must_be_string_list(self):
        data = {"title": "E", "company_name": "A", "description": "x", "skills": "python"}
        assert any("skills" in err for err in validate_import(data))
        data["skills"] = ["python", 3]
        assert any("skills" in err for err in validate_import(data))

    @pytest.mark.parametrize("location_type", ["Remote", "hybrid", "On-site", "onsite"])
    def test_known_location_types(self, location_type):
        data = {"title": "E", "company_name": "A", "description": "x", "location_type": location_type}
        assert validate_import(data) == []

    def test_unknown_location_type(self):
        data = {"title": "E", "company_name": "A", "description": "x", "location_type": "Moon base"}
        assert any("location_type" in err for err in validate_import(data))

    def test_invalid_url(self):
        """Invalid URL format should error."""
        data = {"title": "E", "company_name": "A", "description": "x", "source_url": "not-a-url"}
        assert any("source_url" in err for err in validate_import(data))

    def test_invalid_timestamp(self):
        data = {"title": "E", "company_name": "A", "description": "x", "expires_at": "next week"}
        assert any("expires_at" in err for err in validate_import(data))

    def test_optional_fields_must_be_strings(self):
        data = {"title": "E", "company_name": "A", "description": "x", "location": 42}
        assert any("location" in err for err in validate_import(data))

    def test_null_optional_fields_allowed(self):
        data = {"title": "E", "company_name": "A", "description": "x", "location": None, "skills": None}
        assert validate_import(data) == []
