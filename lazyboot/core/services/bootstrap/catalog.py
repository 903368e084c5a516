"""
Task catalog — turn recipes into InstallStages for one platform.

Stages are built right before they run, because some prompts depend on
what is already installed (``nvim``, ``python3``, ``ctags``), and an
earlier stage may have just installed it.
"""

from __future__ import annotations

import shlex
import shutil
from pathlib import Path
from typing import Callable

from lazyboot.core.config.loader import BootstrapConfig
from lazyboot.core.models.action import Action
from lazyboot.core.models.platform import PlatformDescriptor
from lazyboot.core.models.task import InstallStage, InstallTask
from lazyboot.core.services.bootstrap.data.recipes import (
    GO_TOOLS,
    MANAGER_BINARIES,
    NEOVIM_SYSTEM_PREFIXES,
    PACKAGE_RECIPES,
    VENV_PACKAGES,
)


def shell_action(
    action_id: str,
    name: str,
    command: str | list[str],
    requires: list[str] | None = None,
    **params,
) -> Action:
    """Action for the shell adapter."""
    return Action(
        id=action_id,
        name=name,
        adapter="shell",
        params={"command": command, "requires": list(requires or []), **params},
    )


def _uses_sudo(command: str | list[str]) -> bool:
    if isinstance(command, str):
        return command.startswith("sudo ") or " sudo " in command
    return bool(command) and command[0] == "sudo"


def recipe_actions(task_name: str, os_family: str) -> list[Action]:
    """Ordered actions for a package recipe on ``linux`` or ``darwin``.

    Action IDs are ``<task>.<manager>``, suffixed ``.2``, ``.3`` when the
    same manager appears more than once.
    """
    recipe = PACKAGE_RECIPES[task_name]
    seen: dict[str, int] = {}
    actions = []
    for manager, command in recipe.get(os_family, []):
        seen[manager] = seen.get(manager, 0) + 1
        suffix = f".{seen[manager]}" if seen[manager] > 1 else ""
        requires = [MANAGER_BINARIES[manager]]
        if _uses_sudo(command):
            requires.append("sudo")
        actions.append(shell_action(
            f"{task_name}.{manager}{suffix}",
            f"install {recipe['label']} with {manager}",
            command,
            requires=requires,
        ))
    return actions


def recipe_task(task_name: str, os_family: str, **fields) -> InstallTask | None:
    """InstallTask for a recipe, or None if it has no entry for the OS."""
    actions = recipe_actions(task_name, os_family)
    if not actions:
        return None
    return InstallTask(
        name=task_name,
        label=PACKAGE_RECIPES[task_name]["label"],
        primary=actions[0],
        fallbacks=actions[1:],
        **fields,
    )


class TaskCatalog:
    """Builds every install stage for a resolved platform."""

    def __init__(
        self,
        platform: PlatformDescriptor,
        config: BootstrapConfig,
        work_dir: Path,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self.platform = platform
        self.config = config
        self.work_dir = work_dir
        self._which = which

    @property
    def os_family(self) -> str:
        return self.platform.os.value

    # ── Neovim binary ───────────────────────────────────────────

    def neovim_stage(self) -> InstallStage:
        """Fetch and place the Neovim release. Both tasks are required."""
        url = self.platform.download_url
        root = self.platform.archive_root
        extracted = self.work_dir / root

        fetch = InstallTask(
            name="neovim-fetch",
            label="Download Neovim",
            required=True,
            primary=Action(
                id="neovim-fetch.http",
                name=f"download {url}",
                adapter="archive",
                params={"url": url, "dest": str(self.work_dir), "filename": "nvim.tar.gz"},
            ),
            fallbacks=[
                shell_action(
                    "neovim-fetch.curl",
                    "curl + tar",
                    f"curl -fL {shlex.quote(url)} -o nvim.tar.gz --progress-bar && tar xzf nvim.tar.gz",
                    requires=["curl", "tar"],
                    cwd=str(self.work_dir),
                ),
            ],
        )

        system_installs = []
        for index, (suffix, prefix) in enumerate(NEOVIM_SYSTEM_PREFIXES.items()):
            if index == 0:
                command = ["sudo", "cp", "-r", f"{extracted}/.", f"{prefix}/"]
            else:
                command = f"sudo mkdir -p {prefix} && sudo cp -r {shlex.quote(str(extracted))}/. {prefix}/"
            system_installs.append(shell_action(
                f"neovim-install.{suffix}", f"copy to {prefix}", command, requires=["sudo"],
            ))
        home_install = Action(
            id="neovim-install.home",
            name=f"copy to {self.config.home / 'nvim'}",
            adapter="filesystem",
            params={
                "operation": "copy_tree",
                "source": str(extracted),
                "path": str(self.config.home / "nvim"),
            },
        )
        install = InstallTask(
            name="neovim-install",
            label="Install Neovim",
            required=True,
            primary=system_installs[0],
            fallbacks=[*system_installs[1:], home_install],
        )

        prompt = "Do you want to reinstall Neovim?" if self._which("nvim") else None
        return InstallStage(name="Neovim installation", prompt=prompt, tasks=[fetch, install])

    # ── System tools ────────────────────────────────────────────

    def system_deps_stage(self) -> InstallStage:
        tasks = [recipe_task("system-deps", self.os_family)]
        if self.platform.is_linux:
            tasks.append(InstallTask(
                name="fd-symlink",
                label="fd symlink",
                skip_when_present=["fd"],
                primary=shell_action(
                    "fd-symlink.ln",
                    "link fdfind to /usr/local/bin/fd",
                    'sudo ln -sf "$(command -v fdfind)" /usr/local/bin/fd',
                    requires=["fdfind", "sudo"],
                ),
            ))
        return InstallStage(
            name="additional system dependencies",
            prompt="Would you like to install additional system dependencies (fd-find, ripgrep)?",
            decline_message="Some plugins may not work correctly without these tools",
            tasks=[t for t in tasks if t is not None],
        )

    # ── Python tooling ──────────────────────────────────────────

    def python_stage(self) -> InstallStage:
        venv = self.config.venv_dir
        pip = venv / "bin" / "pip"
        tasks = [
            recipe_task("python-runtime", self.os_family),
            recipe_task("pipx", self.os_family),
            InstallTask(
                name="python-venv",
                label="Python tools virtual environment",
                primary=shell_action(
                    "python-venv.venv",
                    f"create {venv}",
                    ["python3", "-m", "venv", "--clear", str(venv)],
                    requires=["python3"],
                ),
            ),
            InstallTask(
                name="python-venv-packages",
                label="Python tools in virtual environment",
                primary=shell_action(
                    "python-venv-packages.pip",
                    "pip install " + " ".join(VENV_PACKAGES),
                    f"{shlex.quote(str(pip))} install --upgrade pip && "
                    f"{shlex.quote(str(pip))} install {' '.join(VENV_PACKAGES)}",
                ),
            ),
        ]
        for tool in self.config.python_tools:
            tasks.append(InstallTask(
                name=f"pipx-{tool}",
                label=f"{tool} (pipx)",
                primary=shell_action(f"pipx-{tool}.pipx", f"pipx install {tool}", ["pipx", "install", tool], requires=["pipx"]),
            ))

        if self._which("python3"):
            prompt = "Would you like to install Python tools for IDE features?"
            decline = "Python IDE features will be limited"
        else:
            prompt = "Would you like to install Python and tools for IDE features?"
            decline = "Python IDE features will not be available"
        return InstallStage(
            name="Python tools",
            prompt=prompt,
            decline_message=decline,
            tasks=[t for t in tasks if t is not None],
        )

    # ── Formatters and linters ──────────────────────────────────

    def formatters_stage(self) -> InstallStage:
        tasks = [
            recipe_task("nodejs", self.os_family, skip_when_present=["npm"]),
            InstallTask(
                name="npm-globals",
                label="JavaScript/TypeScript formatters",
                primary=shell_action(
                    "npm-globals.npm",
                    "npm install -g " + " ".join(self.config.npm_packages),
                    ["npm", "install", "-g", *self.config.npm_packages],
                    requires=["npm"],
                ),
            ),
        ]
        for tool, targets in GO_TOOLS.items():
            actions = [
                shell_action(f"{tool}.go.{i}" if i else f"{tool}.go", f"go install {target}", ["go", "install", target], requires=["go"])
                for i, target in enumerate(targets)
            ]
            tasks.append(InstallTask(name=tool, label=tool, primary=actions[0], fallbacks=actions[1:]))
        return InstallStage(
            name="formatters and linters",
            prompt="Would you like to install code formatters and linters?",
            decline_message="Some code formatting features may be limited",
            tasks=[t for t in tasks if t is not None],
        )

    # ── Navigation index tool ───────────────────────────────────

    def ctags_stage(self) -> InstallStage:
        task = recipe_task("ctags", self.os_family, skip_when_present=["ctags"])
        prompt = None if self._which("ctags") else "Would you like to install ctags for code navigation?"
        return InstallStage(
            name="ctags",
            prompt=prompt,
            decline_message="Code navigation will be limited without ctags",
            tasks=[task] if task else [],
        )

    # ── Starter configuration ───────────────────────────────────

    def starter_stage(self) -> InstallStage:
        root = self.config.config_root
        clone = InstallTask(
            name="starter",
            label="LazyVim starter configuration",
            required=True,
            primary=shell_action(
                "starter.git",
                f"git clone {self.config.starter_repo}",
                ["git", "clone", self.config.starter_repo, str(root)],
                requires=["git"],
            ),
            fallbacks=[
                Action(
                    id="starter.archive",
                    name=f"download {self.config.starter_archive_url}",
                    adapter="archive",
                    params={
                        "url": self.config.starter_archive_url,
                        "dest": str(root),
                        "filename": "starter.tar.gz",
                        "strip_components": 1,
                    },
                ),
            ],
        )
        detach = InstallTask(
            name="starter-detach",
            label="Remove starter's git connection",
            primary=Action(
                id="starter-detach.rm",
                name=f"remove {root / '.git'}",
                adapter="filesystem",
                params={"operation": "remove", "path": str(root / ".git")},
            ),
        )
        return InstallStage(name="starter configuration", tasks=[clone, detach])

    # ── Tags index ──────────────────────────────────────────────

    def tags_stage(self) -> InstallStage:
        global_tags = self.config.global_tags
        local_tags = self.config.config_root / ".tags"
        return InstallStage(name="tags files", tasks=[
            InstallTask(
                name="tags-files",
                label="initial tags files",
                primary=Action(
                    id="tags-files.global",
                    name=f"touch {global_tags}",
                    adapter="filesystem",
                    params={"operation": "touch", "path": str(global_tags)},
                ),
            ),
            InstallTask(
                name="tags-local",
                label="config tags file",
                primary=Action(
                    id="tags-local.touch",
                    name=f"touch {local_tags}",
                    adapter="filesystem",
                    params={"operation": "touch", "path": str(local_tags)},
                ),
            ),
            InstallTask(
                name="tags-generate",
                label="global tags index",
                primary=shell_action(
                    "tags-generate.ctags",
                    "ctags -R",
                    ["ctags", "-R", "-f", str(global_tags), str(self.config.config_root)],
                    requires=["ctags"],
                ),
            ),
        ])

    # ── Fonts ───────────────────────────────────────────────────

    def fonts_stage(self) -> InstallStage:
        font_dir = self.config.font_dir
        fonts_tmp = self.work_dir / "fonts"
        tasks = []
        for name, url in self.config.fonts.items():
            archive = fonts_tmp / f"{name}.zip"
            tasks.append(InstallTask(
                name=f"font-{name}",
                label=f"{name} Nerd Font",
                primary=Action(
                    id=f"font-{name}.http",
                    name=f"download {name}",
                    adapter="archive",
                    params={"url": url, "dest": str(font_dir), "filename": f"fonts/{name}.zip", "format": "zip"},
                ),
                fallbacks=[
                    shell_action(
                        f"font-{name}.curl",
                        "curl + unzip",
                        f"mkdir -p {shlex.quote(str(fonts_tmp))} && "
                        f"curl -fL {shlex.quote(url)} -o {shlex.quote(str(archive))} --progress-bar && "
                        f"unzip -q -o {shlex.quote(str(archive))} -d {shlex.quote(str(font_dir))}",
                        requires=["curl", "unzip"],
                    ),
                ],
            ))
        tasks.append(InstallTask(
            name="font-cache",
            label="font cache",
            primary=shell_action(
                "font-cache.fc-cache",
                "fc-cache -f",
                ["fc-cache", "-f", str(font_dir)],
                requires=["fc-cache"],
            ),
        ))
        return InstallStage(
            name="Nerd Fonts",
            prompt="Would you like to install Nerd Fonts for proper symbol display?",
            decline_message="Note that you may see strange symbols in Neovim without proper fonts",
            tasks=tasks,
        )

    # ── Post-install ────────────────────────────────────────────

    def post_install_stage(self) -> InstallStage:
        return InstallStage(name="post-install", tasks=[
            InstallTask(
                name="mason-cache",
                label="mason cache directory",
                primary=Action(
                    id="mason-cache.mkdir",
                    name=f"mkdir {self.config.mason_dir}",
                    adapter="filesystem",
                    params={"operation": "mkdir", "path": str(self.config.mason_dir)},
                ),
            ),
        ])
