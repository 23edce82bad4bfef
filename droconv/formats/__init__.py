"""File format handlers for DRO input and IMF output."""
