"""Tests for the secret-scan tool entry point."""

from pathlib import Path

from vibesafe.tool import run_secret_scan

from secret_samples import AWS_ACCESS_KEY


class TestRunSecretScan:
    def test_reports_findings(self, make_tree):
        root = make_tree({"leak.py": f"K = '{AWS_ACCESS_KEY}'\n"})
        text = run_secret_scan(str(root))
        assert text.startswith(f"## Secrets found in {root}:")
        assert "**Type:** AWS Access Key ID" in text
        assert f"```{AWS_ACCESS_KEY}```" in text

    def test_clean_path(self, make_tree):
        root = make_tree({"ok.py": "x = 1\n"})
        assert run_secret_scan(str(root)) == f"✅ No secrets found in {root}."

    def test_missing_path(self, tmp_path: Path):
        missing = tmp_path / "missing"
        assert run_secret_scan(str(missing)) == f"✅ No secrets found in {missing}."

    def test_defaults_to_working_directory(self, make_tree, monkeypatch):
        root = make_tree({"leak.py": f"K = '{AWS_ACCESS_KEY}'\n"})
        monkeypatch.chdir(root)
        text = run_secret_scan()
        assert "leak.py" in text

    def test_unexpected_error_becomes_text(self, monkeypatch):
        import vibesafe.tool as tool

        def boom(*args, **kwargs):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(tool, "scan", boom)
        assert run_secret_scan("/anywhere") == (
            "Error during secret scan for /anywhere: disk on fire"
        )
