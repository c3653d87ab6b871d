from click.testing import CliRunner

from folio.build import CompileResult
from folio.cli import cli


def test_cli_compile(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)
    calls = {}

    def fake_compile_site(root, include_drafts=None, clean_output=True):
        calls["root"] = root
        calls["drafts"] = include_drafts
        calls["clean"] = clean_output
        return CompileResult(pages=[], posts=[])

    monkeypatch.setattr("folio.build.compile_site", fake_compile_site)
    result = runner.invoke(cli, ["compile", "--drafts", "--keep-output"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Compiled 0 pages and 0 posts" in result.output
    assert calls["root"].resolve() == tmp_path.resolve()
    assert calls["drafts"] is True
    assert calls["clean"] is False


def test_cli_compile_reports_content_errors(monkeypatch, tmp_path):
    runner = CliRunner()
    monkeypatch.chdir(tmp_path)
    bad = tmp_path / "content" / "posts" / "2024-01-01-bad.md"
    bad.parent.mkdir(parents=True)
    bad.write_text('---\nlayout: "post"\ntitle: Bad\n---\n', encoding="utf-8")

    result = runner.invoke(cli, ["compile"])
    assert result.exit_code == 1
    assert "Compile failed" in result.output
    assert "2024-01-01-bad.md" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "folio" in result.output
