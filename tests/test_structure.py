"""Basic test to verify test infrastructure is working."""


def test_project_structure():
    """Verify that the project structure is set up correctly."""
    import hisab

    assert hasattr(hisab, "__version__")
    assert hisab.__version__ == "0.1.0"


def test_api_exports():
    """Verify the facade exposes every entry point."""
    from hisab import api

    for name in (
        "analyze",
        "analyze_date",
        "calculate_prayer_times",
        "calculate_visibility",
        "daud_schedule",
    ):
        assert callable(getattr(api, name))
