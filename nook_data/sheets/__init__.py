"""Spreadsheet access and local JSON cache."""
