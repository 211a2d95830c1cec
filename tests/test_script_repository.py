"""
Tests for the script repository — inline and file resolution, error taxonomy.
"""

from pathlib import Path

import pytest

from installsite.core.config.loader import scripts_dir
from installsite.core.services.script_repository import (
    NotFoundError,
    ReadError,
    ScriptError,
    ScriptRepository,
)


@pytest.fixture
def repo(site, site_file: Path) -> ScriptRepository:
    return ScriptRepository(site, scripts_dir(site, site_file))


class TestResolve:
    def test_inline_needs_no_files(self, site, tmp_path: Path):
        repo = ScriptRepository(site, tmp_path / "does-not-exist")
        body = repo.resolve("linux-macos")
        assert body.variant_id == "linux-macos"
        assert body.text == "curl -fsSL https://joel.example.test/api/install | bash"

    def test_file_exact_contents(self, repo: ScriptRepository, posix_script: str):
        assert repo.resolve("posix").text == posix_script

    def test_crlf_preserved(self, repo: ScriptRepository, ps1_script: str):
        assert repo.resolve("windows").text == ps1_script
        assert "\r\n" in repo.resolve("windows").text

    def test_reads_current_file_each_time(self, repo: ScriptRepository, posix_script: str):
        first = repo.resolve("posix")
        (repo.scripts_dir / "install").write_text("#!/bin/sh\necho v2\n", encoding="utf-8")
        second = repo.resolve("posix")
        assert first.text == posix_script
        assert second.text == "#!/bin/sh\necho v2\n"


class TestErrors:
    def test_unknown_variant(self, repo: ScriptRepository):
        with pytest.raises(NotFoundError) as exc:
            repo.resolve("solaris")
        assert exc.value.variant_id == "solaris"

    def test_missing_file(self, repo: ScriptRepository):
        (repo.scripts_dir / "install.ps1").unlink()
        with pytest.raises(NotFoundError, match="install.ps1"):
            repo.resolve("windows")

    def test_directory_in_place_of_file(self, repo: ScriptRepository):
        (repo.scripts_dir / "install").unlink()
        (repo.scripts_dir / "install").mkdir()
        with pytest.raises(NotFoundError):
            repo.resolve("posix")

    def test_undecodable_is_read_error(self, repo: ScriptRepository):
        (repo.scripts_dir / "install").write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(ReadError, match="UTF-8"):
            repo.resolve("posix")

    def test_os_error_is_read_error(self, repo: ScriptRepository, monkeypatch):
        def boom(self):
            raise PermissionError("permission denied")

        monkeypatch.setattr(Path, "read_bytes", boom)
        with pytest.raises(ReadError, match="permission denied"):
            repo.resolve("posix")

    def test_inline_variant_has_no_path(self, repo: ScriptRepository):
        with pytest.raises(NotFoundError, match="not backed by a file"):
            repo.path_for(repo.variant("linux-macos"))

    def test_both_are_script_errors(self):
        assert issubclass(NotFoundError, ScriptError)
        assert issubclass(ReadError, ScriptError)
        assert not issubclass(NotFoundError, ReadError)


class TestPackagedScripts:
    def test_default_scripts_resolve(self, tmp_path: Path, monkeypatch):
        from installsite.core.config.loader import load_site

        monkeypatch.chdir(tmp_path)
        site = load_site()
        repo = ScriptRepository(site, scripts_dir(site))
        for variant in site.file_variants():
            assert repo.resolve(variant.id).text.strip()

    def test_posix_installer_contract(self, tmp_path: Path, monkeypatch):
        from installsite.core.config.loader import load_site

        monkeypatch.chdir(tmp_path)
        site = load_site()
        text = ScriptRepository(site, scripts_dir(site)).resolve("posix-script").text
        assert text.startswith("#!/bin/sh")
        assert "uname -s" in text and "uname -m" in text
        assert "releases/latest/download" in text
        assert ".local/bin" in text
        assert "exit 1" in text

    def test_posix_usage_matches_one_liner(self, tmp_path: Path, monkeypatch):
        from installsite.core.config.loader import load_site

        monkeypatch.chdir(tmp_path)
        site = load_site()
        text = ScriptRepository(site, scripts_dir(site)).resolve("posix-script").text
        one_liner = site.get_variant("posix").content
        assert one_liner.endswith("| bash")
        assert f"#   {one_liner}\n" in text
