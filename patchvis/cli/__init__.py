"""Command-line wrapper for the patch diagram renderer."""
