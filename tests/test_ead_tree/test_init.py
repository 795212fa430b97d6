"""Test module for ead_tree package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    import ead_tree

    assert ead_tree is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import ead_tree

    assert isinstance(ead_tree.__version__, str)
    assert ead_tree.__version__ == "0.1.0"


def test_package_exports_conversion_entry_points() -> None:
    """Test that the simple API and error types are exported."""
    import ead_tree

    for name in (
        "convert",
        "convert_string",
        "convert_file",
        "to_json",
        "TreeConverter",
        "TreeBuilder",
        "Node",
        "EmptyStackError",
        "UnterminatedStreamError",
    ):
        assert name in ead_tree.__all__
        assert hasattr(ead_tree, name)
