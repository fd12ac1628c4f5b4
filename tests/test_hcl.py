"""Tests for riverspec.hcl."""

from __future__ import annotations

from pathlib import Path

import pytest

from riverspec.hcl import load, scan
from riverspec.projects import Project
from riverspec.resources import OriginSpec
from riverspec.workspace import Workspace


class TeamProject(Project):
    team: str = ""


def _write_hcl(tmp_path: Path, subdir: str, filename: str, content: str) -> Path:
    d = tmp_path / subdir
    d.mkdir(parents=True, exist_ok=True)
    f = d / filename
    f.write_text(content)
    return f


class TestLoad:
    def test_parses_blocks(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            ".",
            "edge.hcl",
            """
            blueprint "edge" {
                ensure "service" {
                    name = "web"
                }
            }
            """,
        )
        result = load(f)
        assert result["blueprint"][0]["edge"]["ensure"][0]["service"]["name"] == "web"

    def test_renders_template(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            ".",
            "edge.hcl",
            """
            project "cdn" {
                description = "{{ env_name }} edge"
            }
            """,
        )
        result = load(f, context={"env_name": "staging"})
        assert result["project"][0]["cdn"]["description"] == "staging edge"

    def test_template_loop(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            ".",
            "edge.hcl",
            """
            blueprint "monitors" {
            {% for path in paths %}
                ensure "health_monitor" {
                    label = "{{ path }}"
                    service = "1"
                    name = "{{ path }}"
                    url = "https://www.example.com/{{ path }}"
                }
            {% endfor %}
            }
            """,
        )
        result = load(f, context={"paths": ["status", "ping"]})
        ops = result["blueprint"][0]["monitors"]["ensure"]
        assert [op["health_monitor"]["name"] for op in ops] == ["status", "ping"]

    def test_references_survive_parsing(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            ".",
            "edge.hcl",
            """
            project "cdn" {
                ensure "origin" {
                    service = "${service.web.id}"
                    host = "origin.example.com"
                }
            }
            """,
        )
        result = load(f)
        assert result["project"][0]["cdn"]["ensure"][0]["origin"]["service"] == "${service.web.id}"

    def test_undefined_template_variable(self, tmp_path):
        f = _write_hcl(tmp_path, ".", "edge.hcl", 'project "p" { description = "{{ missing }}" }')
        with pytest.raises(ValueError, match="edge.hcl"):
            load(f)

    def test_invalid_hcl(self, tmp_path):
        f = _write_hcl(tmp_path, ".", "broken.hcl", 'project "p" {')
        with pytest.raises(ValueError, match="broken.hcl: invalid HCL"):
            load(f)


class TestScan:
    def test_returns_workspace(self, tmp_path):
        _write_hcl(tmp_path, ".", "cdn.hcl", 'project "cdn" { description = "edge" }')
        ws = scan(tmp_path)
        assert isinstance(ws, Workspace)
        assert "cdn" in ws

    def test_custom_project_type(self, tmp_path):
        _write_hcl(tmp_path, ".", "cdn.hcl", 'project "cdn" { team = "platform" }')
        proj = scan(tmp_path, project_type=TeamProject)["cdn"]
        assert isinstance(proj, TeamProject)
        assert proj.team == "platform"

    def test_recurse(self, tmp_path):
        _write_hcl(tmp_path, ".", "top.hcl", 'project "top" {}')
        _write_hcl(tmp_path, "sub", "nested.hcl", 'project "nested" {}')

        assert set(scan(tmp_path, recurse=True)) == {"top", "nested"}
        assert set(scan(tmp_path, recurse=False)) == {"top"}

    def test_empty_and_missing(self, tmp_path):
        assert len(scan(tmp_path)) == 0
        assert len(scan(tmp_path / "nonexistent")) == 0

    def test_decodes_managed_specs(self, tmp_path):
        _write_hcl(
            tmp_path,
            ".",
            "cdn.hcl",
            """
            blueprint "edge" {
                ensure "service" {
                    name = "web"
                }
                ensure "origin" {
                    label = "main"
                    service = "${service.web.id}"
                    host = "origin.example.com"
                    https_port = 8443
                }
                ensure "domain" {
                    service = "${service.web.id}"
                    label = "www"
                    domain = "www.example.com"
                    mappings = [{ target_id = "${origin.main.id}" }]
                }
            }
            project "cdn" {
                use = ["edge"]
            }
            """,
        )
        ops = scan(tmp_path)["cdn"].blueprints[0].ops
        specs = [op.spec for op in ops]

        assert [s.address for s in specs] == ["service.web", "origin.main", "domain.www"]
        origin = next(s for s in specs if isinstance(s, OriginSpec))
        assert origin.attrs["https_port"] == 8443
        assert origin.attrs["service"] == "${service.web.id}"
