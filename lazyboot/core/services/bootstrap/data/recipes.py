"""
Package-manager recipes. Pure data, no logic.

Each recipe is an ordered list of ``(manager, command)`` attempts per
OS family. The first entry becomes the task's primary action, the rest
its fallbacks, in this exact order. A manager is only usable when its
binary (``MANAGER_BINARIES``) is on PATH; otherwise that attempt fails
immediately and the next one is tried.

String commands run through the shell (``&&`` chains); lists run directly.
"""

from __future__ import annotations

# manager → binary whose presence enables it
MANAGER_BINARIES: dict[str, str] = {
    "apt": "apt-get",
    "dnf": "dnf",
    "yum": "yum",
    "pacman": "pacman",
    "brew": "brew",
}


PACKAGE_RECIPES: dict[str, dict] = {

    # ── System search / clipboard tools ─────────────────────────

    "system-deps": {
        "label": "additional system dependencies",
        "linux": [
            ("apt", "sudo apt-get update && sudo apt-get install -y fd-find ripgrep xclip"),
            ("dnf", ["sudo", "dnf", "install", "-y", "fd-find", "ripgrep"]),
            ("pacman", ["sudo", "pacman", "-S", "--noconfirm", "fd", "ripgrep"]),
        ],
        "darwin": [
            ("brew", ["brew", "install", "fd", "ripgrep"]),
        ],
    },

    # ── Python runtime ──────────────────────────────────────────

    "python-runtime": {
        "label": "Python runtime",
        "linux": [
            ("apt", "sudo apt-get update && sudo apt-get install -y python3 python3-pip python3-venv python3-full"),
            ("apt", ["sudo", "apt-get", "install", "-y", "python3", "python3-pip", "python3-venv"]),
            ("dnf", ["sudo", "dnf", "install", "-y", "python3", "python3-pip", "pipx"]),
            ("yum", ["sudo", "yum", "install", "-y", "python3", "python3-pip"]),
            ("pacman", ["sudo", "pacman", "-S", "--noconfirm", "python", "python-pip", "python-pipx"]),
        ],
        "darwin": [
            ("brew", ["brew", "install", "python", "pipx"]),
        ],
    },
    "pipx": {
        "label": "pipx",
        "linux": [
            ("apt", ["sudo", "apt-get", "install", "-y", "pipx"]),
        ],
        "darwin": [],
    },

    # ── Node.js (formatters) ────────────────────────────────────

    "nodejs": {
        "label": "Node.js",
        "linux": [
            ("apt", "sudo apt-get update && sudo apt-get install -y nodejs npm"),
            ("dnf", ["sudo", "dnf", "install", "-y", "nodejs", "npm"]),
            ("yum", ["sudo", "yum", "install", "-y", "nodejs", "npm"]),
            ("pacman", ["sudo", "pacman", "-S", "--noconfirm", "nodejs", "npm"]),
        ],
        "darwin": [
            ("brew", ["brew", "install", "node"]),
        ],
    },

    # ── Code navigation ─────────────────────────────────────────

    "ctags": {
        "label": "ctags",
        "linux": [
            ("apt", "sudo apt-get update && sudo apt-get install -y universal-ctags"),
            ("apt", ["sudo", "apt-get", "install", "-y", "exuberant-ctags"]),
            ("dnf", ["sudo", "dnf", "install", "-y", "ctags"]),
            ("yum", ["sudo", "yum", "install", "-y", "ctags"]),
            ("pacman", ["sudo", "pacman", "-S", "--noconfirm", "ctags"]),
        ],
        "darwin": [
            ("brew", ["brew", "install", "universal-ctags"]),
        ],
    },
}


# Go tools: ordered install targets, first success wins
GO_TOOLS: dict[str, list[str]] = {
    "gopls": ["golang.org/x/tools/gopls@latest"],
    "golangci-lint": [
        "github.com/golangci/golangci-lint/cmd/golangci-lint@latest",
        "github.com/golangci/golangci-lint/cmd/golangci-lint@v1.55.2",
    ],
}

# Packages installed into the editor's Python venv
VENV_PACKAGES: list[str] = ["pynvim", "black", "isort", "pylint", "flake8", "djlint"]

# Neovim install destinations (action id suffix → prefix), in fallback order
NEOVIM_SYSTEM_PREFIXES: dict[str, str] = {
    "usr-local": "/usr/local",
    "opt": "/opt/nvim",
}
