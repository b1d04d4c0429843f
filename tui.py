#!/usr/bin/env python3
"""Magno TUI entry point."""

from ui.app import MagnoApp


def main():
    """Run the Magno TUI."""
    app = MagnoApp()
    app.run()


if __name__ == "__main__":
    main()
