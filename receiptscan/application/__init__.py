"""Application workflows orchestrating pure parsing and runtime services."""
