"""
shellkit: small command-line wrappers around sed, ssh, tmux, git and the clipboard.
"""

__version__ = "0.1.0"
