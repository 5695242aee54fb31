"""Command line shell for gatekeep."""
