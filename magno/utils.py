"""Helpers shared by the CLI and the TUI."""

import platform
import subprocess


def format_number(n: int) -> str:
    """Format number compactly."""
    if n >= 1_000_000:
        return f"{n / 1_000_000:.1f}M"
    if n >= 1_000:
        return f"{n / 1_000:.1f}K"
    return str(n)


def open_magnet(magnet: str) -> bool:
    """Open magnet link using system protocol handler (bypasses browser)."""
    try:
        system = platform.system()
        if system == "Darwin":
            subprocess.run(["open", magnet], check=True, capture_output=True)
        elif system == "Linux":
            subprocess.run(["xdg-open", magnet], check=True, capture_output=True)
        elif system == "Windows":
            subprocess.run(["start", "", magnet], shell=True, check=True, capture_output=True)
        else:
            return False
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False
