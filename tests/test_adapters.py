"""
Tests for adapters — shell, filesystem, archive, mock, and the registry.
"""

import io
import sys
import tarfile
import zipfile
from pathlib import Path

import pytest

from lazyboot.adapters.mock import MockAdapter
from lazyboot.adapters.network.archive import ArchiveAdapter
from lazyboot.adapters.registry import AdapterRegistry, build_registry
from lazyboot.adapters.shell.command import ShellCommandAdapter
from lazyboot.adapters.shell.filesystem import FilesystemAdapter
from lazyboot.core.models.action import Action, Receipt


def _action(adapter: str, action_id: str = "test.action", **params) -> Action:
    return Action(id=action_id, name=action_id, adapter=adapter, params=params)


def _registry(*adapters) -> AdapterRegistry:
    registry = AdapterRegistry()
    for adapter in adapters:
        registry.register(adapter)
    return registry


# ── Shell ───────────────────────────────────────────────────────


class TestShellCommandAdapter:
    def test_list_command(self, tmp_path):
        registry = _registry(ShellCommandAdapter())
        receipt = registry.execute_action(
            _action("shell", command=[sys.executable, "-c", "print('hello')"]),
            work_dir=str(tmp_path),
        )
        assert receipt.ok
        assert receipt.output == "hello"

    def test_string_command_uses_shell(self, tmp_path):
        registry = _registry(ShellCommandAdapter())
        receipt = registry.execute_action(
            _action("shell", command="echo one && echo two"),
            work_dir=str(tmp_path),
        )
        assert receipt.ok
        assert receipt.output.splitlines() == ["one", "two"]

    def test_non_zero_exit(self, tmp_path):
        registry = _registry(ShellCommandAdapter())
        receipt = registry.execute_action(
            _action("shell", command="echo broken >&2; exit 3"),
            work_dir=str(tmp_path),
        )
        assert receipt.failed
        assert receipt.error == "broken"
        assert receipt.metadata["return_code"] == 3

    def test_missing_required_binary(self, tmp_path):
        adapter = ShellCommandAdapter(which=lambda name: None)
        receipt = _registry(adapter).execute_action(
            _action("shell", command=["apt-get", "install", "x"], requires=["apt-get"]),
            work_dir=str(tmp_path),
        )
        assert receipt.failed
        assert "Required binary not found: apt-get" in receipt.error

    def test_env_passed(self, tmp_path):
        registry = _registry(ShellCommandAdapter())
        receipt = registry.execute_action(
            _action("shell", command="echo $NVIM_PYTHON_HOST_PROG", env={"NVIM_PYTHON_HOST_PROG": "/venv/python3"}),
            work_dir=str(tmp_path),
        )
        assert receipt.output == "/venv/python3"

    def test_cwd_param(self, tmp_path):
        sub = tmp_path / "sub"
        sub.mkdir()
        registry = _registry(ShellCommandAdapter())
        receipt = registry.execute_action(_action("shell", command="pwd", cwd=str(sub)), work_dir=str(tmp_path))
        assert Path(receipt.output).resolve() == sub.resolve()

    def test_missing_command(self):
        receipt = _registry(ShellCommandAdapter()).execute_action(_action("shell"))
        assert receipt.failed
        assert "command" in receipt.error


# ── Filesystem ──────────────────────────────────────────────────


class TestFilesystemAdapter:
    def test_copy_tree_merges(self, tmp_path):
        src = tmp_path / "nvim-linux-x86_64"
        (src / "bin").mkdir(parents=True)
        (src / "bin" / "nvim").write_text("binary")
        dest = tmp_path / "home" / "nvim"
        (dest / "share").mkdir(parents=True)

        receipt = _registry(FilesystemAdapter()).execute_action(
            _action("filesystem", operation="copy_tree", source=str(src), path=str(dest)),
        )
        assert receipt.ok
        assert (dest / "bin" / "nvim").read_text() == "binary"
        assert (dest / "share").is_dir()

    def test_copy_tree_missing_source(self, tmp_path):
        receipt = _registry(FilesystemAdapter()).execute_action(
            _action("filesystem", operation="copy_tree", source=str(tmp_path / "nope"), path=str(tmp_path / "x")),
        )
        assert receipt.failed
        assert "Source directory not found" in receipt.error

    def test_remove_directory(self, tmp_path):
        git = tmp_path / "nvim" / ".git"
        (git / "objects").mkdir(parents=True)
        receipt = _registry(FilesystemAdapter()).execute_action(
            _action("filesystem", operation="remove", path=str(git)),
        )
        assert receipt.ok
        assert not git.exists()

    def test_remove_missing_is_ok(self, tmp_path):
        receipt = _registry(FilesystemAdapter()).execute_action(
            _action("filesystem", operation="remove", path=str(tmp_path / ".git")),
        )
        assert receipt.ok

    def test_touch_and_mkdir_relative(self, tmp_path):
        registry = _registry(FilesystemAdapter())
        registry.execute_action(_action("filesystem", operation="touch", path="tags/global_tags"), work_dir=str(tmp_path))
        registry.execute_action(_action("filesystem", operation="mkdir", path="mason"), work_dir=str(tmp_path))
        assert (tmp_path / "tags" / "global_tags").is_file()
        assert (tmp_path / "mason").is_dir()

    def test_unknown_operation(self, tmp_path):
        receipt = _registry(FilesystemAdapter()).execute_action(
            _action("filesystem", operation="chmod", path=str(tmp_path)),
        )
        assert receipt.failed
        assert "Unknown operation" in receipt.error


# ── Archive ─────────────────────────────────────────────────────


class _FakeResponse(io.BytesIO):
    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def _tarball(members: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in members.items():
            data = content.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def _zipfile(members: dict[str, str]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, content in members.items():
            zf.writestr(name, content)
    return buf.getvalue()


def _opener(payload: bytes, requested: list):
    def _open(request, timeout=None):
        requested.append(request)
        return _FakeResponse(payload)
    return _open


class TestArchiveAdapter:
    def test_tarball_extracted(self, tmp_path):
        requested = []
        payload = _tarball({"nvim-linux-x86_64/bin/nvim": "elf"})
        adapter = ArchiveAdapter(opener=_opener(payload, requested))
        work = tmp_path / "work"
        work.mkdir()

        receipt = _registry(adapter).execute_action(
            _action(
                "archive",
                url="https://example.com/nvim-linux-x86_64.tar.gz",
                dest=str(work),
                filename="nvim.tar.gz",
            ),
            work_dir=str(work),
        )
        assert receipt.ok, receipt.error
        assert (work / "nvim-linux-x86_64" / "bin" / "nvim").read_text() == "elf"
        assert (work / "nvim.tar.gz").is_file()
        assert requested[0].get_header("User-agent").startswith("lazyboot/")

    def test_strip_components(self, tmp_path):
        payload = _tarball({"starter-main/init.lua": "require('config.lazy')", "starter-main/lua/x.lua": ""})
        adapter = ArchiveAdapter(opener=_opener(payload, []))
        dest = tmp_path / "nvim"

        receipt = _registry(adapter).execute_action(
            _action("archive", url="https://example.com/main.tar.gz", dest=str(dest), strip_components=1),
            work_dir=str(tmp_path),
        )
        assert receipt.ok
        assert (dest / "init.lua").is_file()
        assert (dest / "lua" / "x.lua").is_file()

    def test_zip_inferred_from_url(self, tmp_path):
        payload = _zipfile({"AdwaitaMonoNerdFont-Regular.ttf": "font"})
        adapter = ArchiveAdapter(opener=_opener(payload, []))
        fonts = tmp_path / "fonts"

        receipt = _registry(adapter).execute_action(
            _action("archive", url="https://example.com/AdwaitaMono.zip", dest=str(fonts), filename="fonts/A.zip"),
            work_dir=str(tmp_path),
        )
        assert receipt.ok
        assert (fonts / "AdwaitaMonoNerdFont-Regular.ttf").is_file()

    def test_download_failure(self, tmp_path):
        def _offline(request, timeout=None):
            raise OSError("Network is unreachable")

        receipt = _registry(ArchiveAdapter(opener=_offline)).execute_action(
            _action("archive", url="https://example.com/x.tar.gz", dest=str(tmp_path / "x")),
            work_dir=str(tmp_path),
        )
        assert receipt.failed
        assert "Network is unreachable" in receipt.error

    def test_corrupt_archive(self, tmp_path):
        adapter = ArchiveAdapter(opener=_opener(b"not a tarball", []))
        receipt = _registry(adapter).execute_action(
            _action("archive", url="https://example.com/x.tar.gz", dest=str(tmp_path / "x")),
            work_dir=str(tmp_path),
        )
        assert receipt.failed
        assert "Failed to extract" in receipt.error

    @pytest.mark.parametrize("url", ["ftp://example.com/x.tar.gz", "file:///etc/passwd", ""])
    def test_rejects_non_http_urls(self, tmp_path, url):
        receipt = _registry(ArchiveAdapter()).execute_action(
            _action("archive", url=url, dest=str(tmp_path)),
        )
        assert receipt.failed


# ── Mock & registry ─────────────────────────────────────────────


class TestMockAdapter:
    def test_records_calls(self):
        mock = MockAdapter()
        registry = AdapterRegistry(mock_adapter=mock)
        registry.execute_action(_action("shell", "a"))
        registry.execute_action(_action("archive", "b"))
        assert mock.executed_ids == ["a", "b"]

    def test_custom_response(self):
        mock = MockAdapter()
        mock.set_response("a", Receipt.success(adapter="mock", action_id="a", output="custom"))
        receipt = AdapterRegistry(mock_adapter=mock).execute_action(_action("shell", "a"))
        assert receipt.output == "custom"

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("a")
        AdapterRegistry(mock_adapter=mock).execute_action(_action("shell", "a"))
        mock.reset()
        assert mock.call_count == 0
        receipt = AdapterRegistry(mock_adapter=mock).execute_action(_action("shell", "a"))
        assert receipt.ok


class TestRegistry:
    def test_unknown_adapter(self):
        receipt = AdapterRegistry().execute_action(_action("docker"))
        assert receipt.failed
        assert "No adapter registered for 'docker'" in receipt.error

    def test_build_registry_dispatches_by_adapter_name(self, tmp_path):
        registry = build_registry()
        receipt = registry.execute_action(
            _action("filesystem", operation="mkdir", path=str(tmp_path / "mason")),
        )
        assert receipt.ok
        assert receipt.adapter == "filesystem"
        assert (tmp_path / "mason").is_dir()

    def test_build_registry_uses_given_which(self, tmp_path):
        registry = build_registry(which=lambda name: None)
        receipt = registry.execute_action(
            _action("shell", command=["git", "clone", "x"], requires=["git"]),
            work_dir=str(tmp_path),
        )
        assert receipt.failed
        assert "Required binary not found: git" in receipt.error

    def test_validation_error_becomes_receipt(self):
        receipt = _registry(ArchiveAdapter()).execute_action(_action("archive", url="https://example.com/x.zip"))
        assert receipt.failed
        assert receipt.error == "Validation failed: Missing required param: 'dest'"
