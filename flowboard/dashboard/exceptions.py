class SheetSourceError(Exception):
    """Raised when spreadsheet values cannot be fetched."""
