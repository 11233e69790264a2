"""Command line interface; run with `python -m labdesk.cli`."""
