"""Pure helpers — classification and pagination."""
