"""Command-line interface for Stub Calc."""
