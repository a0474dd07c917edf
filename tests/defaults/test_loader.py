import pytest

from defaults.loader import DEFAULT_CATEGORIES_FILE, load_category_data, load_default_categories
from ingestion.errors import FormatError


class TestLoadDefaultCategories:
    """Tests for the packaged default category set."""

    def test_packaged_file_exists(self):
        """Test that the YAML ships with the package."""
        assert DEFAULT_CATEGORIES_FILE.exists()

    def test_order_and_ids(self):
        """Test category order, which is keyword precedence."""
        categories = load_default_categories()

        assert [c.id for c in categories] == [
            "income",
            "food",
            "housing",
            "transportation",
            "shopping",
            "entertainment",
            "healthcare",
            "personal",
            "education",
            "bills",
            "uncategorized",
        ]
        assert categories[1].name == "Food & Dining"
        assert categories[-1].type == "both"

    def test_returns_fresh_objects(self):
        """Test that callers cannot alter the cached defaults."""
        first = load_default_categories()
        first[0].keywords.append("lottery")

        second = load_default_categories()

        assert "lottery" not in second[0].keywords

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_category_data(tmp_path / "nope.yaml")

    def test_non_list_root(self, tmp_path):
        """Test that the YAML root must be a list."""
        path = tmp_path / "categories.yaml"
        path.write_text("income:\n  keywords: [salary]\n")

        with pytest.raises(FormatError, match="must contain a list"):
            load_category_data(path)
