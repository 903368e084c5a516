"""
lazyboot — Neovim + LazyVim environment bootstrapper.
"""

__version__ = "0.1.0"
