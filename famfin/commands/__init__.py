"""Command implementations behind the famfin CLI."""
