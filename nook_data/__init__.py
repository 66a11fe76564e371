"""Export game reference spreadsheet tabs to normalized JSON files."""

__version__ = "0.1.0"
