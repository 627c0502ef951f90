"""String formatting for column names and model display labels."""

# Tokens shown in all caps when they appear as whole words.
_LABEL_ACRONYMS = ("id", "cfu", "t0", "b1")


def format_column_label(col: str) -> str:
    """
    Convert a column name to a human-readable display label.

    Example: "cumulative_growth" -> "Cumulative Growth".
    Example: "threshold_t0" -> "Threshold T0".

    Args:
        col: Snake_case column name.

    Returns:
        Title-style label with underscores replaced by spaces.
    """
    words = col.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _LABEL_ACRONYMS else w.capitalize() for w in words
    )


def model_display_label(organism: str, source_label: str) -> str:
    """Label a growth model by organism and source, e.g. "Listeria: Smith 2010"."""
    return f"{organism}: {source_label}"
