"""
toolshed — a personal package manager for developer tools.

Installs language servers, CLIs and formatters into a user-owned
directory tree, preferring prebuilt GitHub release assets and falling
back to the tool's native package manager (go, npm, pip, cargo).
"""

__version__ = "0.1.0"
