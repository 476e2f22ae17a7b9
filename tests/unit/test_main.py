# tests/unit/test_main.py — v1
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
import types
from pathlib import Path

import pytest

from buildcore.commands.plugin_kit.base_plugin import BasePlugin
from buildcore.logging.logger import ROOT_LOGGER
from buildcore.main import _build_parser, main
from buildcore.netlify_config.redirects_file import HEADER_COMMENT


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()


class SiteMapPlugin(BasePlugin):
    """Writes a sitemap into the publish directory during onPostBuild."""

    @property
    def name(self) -> str:
        return "netlify-plugin-sitemap"

    async def on_post_build(self, *, constants, env, utils):
        (constants.publish_dir / "sitemap.xml").write_text("<urlset/>")


@pytest.fixture
def sitemap_module(monkeypatch):
    module = types.ModuleType("site_plugins")
    module.SiteMapPlugin = SiteMapPlugin
    monkeypatch.setitem(sys.modules, "site_plugins", module)
    return module


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_update_config_subcommand(self):
        args = _build_parser().parse_args(
            ["update-config", "muts.json", "--build-dir", "/site", "--context", "deploy-preview"]
        )
        assert args.command == "update-config"
        assert args.mutations == Path("muts.json")
        assert args.build_dir == Path("/site")
        assert args.context == "deploy-preview"

    def test_build_subcommand(self):
        args = _build_parser().parse_args(
            ["build", "--command", "make", "--plugin", "a.P", "--plugin", "b.Q"]
        )
        assert args.command == "build"
        assert args.build_command == "make"
        assert args.plugins == ["a.P", "b.Q"]

    def test_write_redirects_subcommand(self):
        args = _build_parser().parse_args(["write-redirects", "rules.json", "--publish-dir", "dist"])
        assert args.rules == Path("rules.json")
        assert args.publish_dir == Path("dist")


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------

class TestMain:
    def test_no_command(self):
        assert main([]) == 1

    def test_update_then_restore(self, tmp_path, build_dir):
        muts = tmp_path / "muts.json"
        muts.write_text(json.dumps([
            {"kind": "headers", "operation": "replace",
             "value": [{"for": "/*", "values": {"X-Frame-Options": "DENY"}}]},
        ]))

        assert main(["update-config", str(muts), "--build-dir", str(build_dir)]) == 0
        assert "X-Frame-Options" in (build_dir / "netlify.toml").read_text()

        assert main(["restore-config", str(muts), "--build-dir", str(build_dir)]) == 0
        assert not (build_dir / "netlify.toml").exists()

    def test_write_redirects(self, tmp_path, build_dir, capsys):
        rules = tmp_path / "rules.json"
        rules.write_text(json.dumps({
            "rewrites": [{"from_path": "/api", "to_path": "/.netlify/functions/api"}],
        }))
        assert main(["write-redirects", str(rules), "--build-dir", str(build_dir)]) == 0
        assert (build_dir / "_redirects").read_text() == (
            f"{HEADER_COMMENT}\n\n/api  /.netlify/functions/api  200"
        )
        assert "Wrote 1 rule(s)" in capsys.readouterr().out

    def test_invalid_mutation_file(self, tmp_path, build_dir):
        muts = tmp_path / "muts.json"
        muts.write_text(json.dumps([{"kind": "headers", "operation": "explode"}]))
        assert main(["update-config", str(muts), "--build-dir", str(build_dir)]) == 1

    def test_invalid_settings(self, tmp_path, build_dir, capsys):
        muts = tmp_path / "muts.json"
        muts.write_text("[]")
        assert main(["update-config", str(muts), "--build-dir", str(build_dir), "--context", " "]) == 1
        assert "Invalid configuration" in capsys.readouterr().err


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell syntax")
class TestBuildCommand:
    def test_build_runs_command_and_plugins(self, build_dir, sitemap_module, capsys):
        (build_dir / "public").mkdir()
        code = main([
            "build", "--build-dir", str(build_dir), "--publish-dir", "public",
            "--command", "echo built > out.txt", "--plugin", "site_plugins.SiteMapPlugin",
        ])
        assert code == 0
        assert (build_dir / "out.txt").read_text().strip() == "built"
        assert (build_dir / "public" / "sitemap.xml").read_text() == "<urlset/>"
        assert "Build succeeded: 2 command(s)" in capsys.readouterr().out

    def test_plugins_from_environment(self, build_dir, sitemap_module, monkeypatch):
        monkeypatch.setenv("BUILDCORE_PLUGINS", '["site_plugins.SiteMapPlugin"]')
        assert main(["build", "--build-dir", str(build_dir)]) == 0
        assert (build_dir / "sitemap.xml").exists()

    def test_failed_build_command(self, build_dir, capsys):
        assert main(["build", "--build-dir", str(build_dir), "--command", "exit 3"]) == 1
        assert "Build failed in build.command" in capsys.readouterr().out

    def test_unknown_plugin(self, build_dir):
        assert main(["build", "--build-dir", str(build_dir), "--plugin", "missing_mod.Plugin"]) == 1
