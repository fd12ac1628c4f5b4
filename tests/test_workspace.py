"""Tests for riverspec.workspace."""

from __future__ import annotations

from pathlib import Path

import pytest

from riverspec.config import API_ENDPOINT_ENV_VAR, API_TOKEN_ENV_VAR
from riverspec.projects import Project
from riverspec.resources import HealthMonitorSpec, ServiceSpec
from riverspec.specop import Absent, Ensure, Present
from riverspec.workspace import Workspace


class TeamProject(Project):
    team: str = ""


def _write_hcl(tmp_path: Path, filename: str, content: str) -> Path:
    f = tmp_path / filename
    f.write_text(content)
    return f


def _service_bp(name: str, *, include: list[str] | None = None) -> dict:
    data: dict = {"ensure": [{"service": {"name": name}}]}
    if include:
        data["include"] = include
    return {"blueprint": [{name: data}]}


class TestConstruction:
    def test_empty(self):
        ws = Workspace()
        assert ws._project_type is Project
        assert len(ws) == 0
        assert list(ws) == []
        assert "anything" not in ws
        assert ws.get("missing") is None
        with pytest.raises(KeyError):
            ws["missing"]

    def test_repr(self):
        assert repr(Workspace(project_type=TeamProject)) == (
            "Workspace(project_type=TeamProject, blueprints=0, projects=0)"
        )


class TestAdd:
    def test_project_with_blueprint(self):
        ws = Workspace()
        ws.add(_service_bp("web"))
        ws.add({"project": [{"cdn": {"use": ["web"], "description": "edge"}}]})

        proj = ws["cdn"]
        assert proj.description == "edge"
        [bp] = proj.blueprints
        [op] = bp.ops
        assert isinstance(op, Ensure)
        assert isinstance(op.spec, ServiceSpec)
        assert op.spec.address == "service.web"

    def test_strategies(self):
        ws = Workspace()
        ws.add(
            {
                "project": [
                    {
                        "cdn": {
                            "absent": [{"service": {"name": "old"}}],
                            "ensure": [{"service": {"name": "web"}}],
                            "present": [{"service": {"name": "api"}}],
                        }
                    }
                ]
            }
        )
        [inline] = ws["cdn"].blueprints
        assert inline.name == "cdn:inline"
        assert [type(op) for op in inline.ops] == [Present, Ensure, Absent]

    def test_includes_run_first(self):
        ws = Workspace()
        ws.add(_service_bp("base"))
        ws.add(_service_bp("web", include=["base"]))
        ws.add({"project": [{"cdn": {"use": ["web"]}}]})

        ops = ws["cdn"].blueprints[0].ops
        assert [op.spec.address for op in ops] == ["service.base", "service.web"]

    def test_circular_include(self):
        ws = Workspace()
        ws.add(_service_bp("a", include=["b"]))
        ws.add(_service_bp("b", include=["a"]))
        ws.add({"project": [{"cdn": {"use": ["a"]}}]})
        with pytest.raises(ValueError, match="Circular include"):
            ws["cdn"]

    def test_unknown_include(self):
        ws = Workspace()
        ws.add(_service_bp("a", include=["ghost"]))
        with pytest.raises(ValueError, match="Unknown blueprint: 'ghost'"):
            ws.get("anything")

    def test_unknown_blueprint_in_project(self):
        ws = Workspace()
        ws.add({"project": [{"cdn": {"use": ["ghost"]}}]})
        with pytest.raises(ValueError, match="unknown blueprint: 'ghost'"):
            ws["cdn"]

    def test_unknown_spec_type(self):
        ws = Workspace()
        ws.add({"project": [{"cdn": {"ensure": [{"load_balancer": {"name": "lb"}}]}}]})
        with pytest.raises(ValueError, match="Unknown spec type: 'load_balancer'"):
            ws["cdn"]

    def test_invalid_spec_attrs(self):
        ws = Workspace()
        ws.add({"project": [{"cdn": {"ensure": [{"service": {"name": "web", "colour": "red"}}]}}]})
        with pytest.raises(ValueError, match="unknown attribute"):
            ws["cdn"]

    def test_duplicates(self):
        ws = Workspace()
        ws.add(_service_bp("web"))
        with pytest.raises(ValueError, match="Duplicate blueprint: 'web'"):
            ws.add(_service_bp("web"))

        ws.add({"project": [{"cdn": {}}]})
        with pytest.raises(ValueError, match="Duplicate project: 'cdn'"):
            ws.add({"project": [{"cdn": {}}]})

    def test_custom_project_fields(self):
        ws = Workspace(project_type=TeamProject)
        ws.add({"project": [{"cdn": {"team": "platform"}}]})
        assert ws["cdn"].team == "platform"

    def test_fresh_resolution_each_access(self):
        ws = Workspace()
        ws.add({"project": [{"cdn": {}}]})
        assert ws["cdn"] is not ws["cdn"]


class TestMapping:
    @pytest.fixture
    def ws(self) -> Workspace:
        ws = Workspace()
        ws.add({"project": [{"alpha": {}}, {"beta": {}}, {"gamma": {}}]})
        return ws

    def test_keys_and_values(self, ws):
        assert list(ws.keys()) == ["alpha", "beta", "gamma"]
        assert [p.name for p in ws.values()] == ["alpha", "beta", "gamma"]

    def test_filter_preserves_order_and_skips_missing(self, ws):
        assert [p.name for p in ws.filter(["gamma", "ghost", "alpha"])] == ["gamma", "alpha"]
        assert ws.filter([]) == []


class TestFiles:
    def test_load(self, tmp_path):
        f = _write_hcl(
            tmp_path,
            "cdn.hcl",
            """
            blueprint "checks" {
                ensure "health_monitor" {
                    service = "1"
                    name = "status"
                    url = "https://www.example.com/status"
                }
            }
            project "cdn" { use = ["checks"] }
            """,
        )
        ws = Workspace()
        ws.load(str(f))

        [op] = ws["cdn"].blueprints[0].ops
        assert isinstance(op.spec, HealthMonitorSpec)
        assert op.spec.address == "health_monitor.status"

    def test_load_renders_context(self, tmp_path):
        f = _write_hcl(tmp_path, "cdn.hcl", 'project "cdn" { description = "{{ stage }}" }')
        ws = Workspace(context={"stage": "prod"})
        ws.load(f)
        assert ws["cdn"].description == "prod"

    def test_scan_sorted_and_filtered(self, tmp_path):
        _write_hcl(tmp_path, "b.hcl", 'blueprint "web" { ensure "service" { name = "web" } }')
        _write_hcl(tmp_path, "a.hcl", 'project "cdn" { use = ["web"] }')
        _write_hcl(tmp_path, "notes.txt", "not hcl")

        ws = Workspace()
        ws.scan(tmp_path)

        assert list(ws) == ["cdn"]
        assert repr(ws) == "Workspace(project_type=Project, blueprints=1, projects=1)"

    def test_scan_missing_dir(self, tmp_path):
        ws = Workspace()
        ws.scan(tmp_path / "nope")
        assert len(ws) == 0


class TestProviderConfig:
    @pytest.fixture(autouse=True)
    def _clean_env(self, monkeypatch):
        monkeypatch.delenv(API_ENDPOINT_ENV_VAR, raising=False)
        monkeypatch.delenv(API_TOKEN_ENV_VAR, raising=False)

    def test_from_provider_block(self, monkeypatch):
        monkeypatch.setenv("CDN_TOKEN", "from-env")
        ws = Workspace()
        ws.add(
            {
                "provider": [
                    {"endpoint": "https://hcl.test/api/", "token": "${env.CDN_TOKEN}", "timeout": 10}
                ]
            }
        )

        config = ws.provider_config()

        assert config.endpoint == "https://hcl.test/api/"
        assert config.token == "from-env"
        assert config.timeout == 10.0

    def test_overrides_win(self):
        ws = Workspace()
        ws.add({"provider": [{"token": "hcl-token"}]})
        assert ws.provider_config(token="cli-token").token == "cli-token"
        assert ws.provider_config(token=None).token == "hcl-token"

    def test_template_variables(self):
        ws = Workspace(context={"endpoint": "https://var.test/api/"})
        ws.add({"provider": [{"endpoint": "${var.endpoint}"}]})
        assert ws.provider_config().endpoint == "https://var.test/api/"

    def test_defaults_to_environment(self, monkeypatch):
        monkeypatch.setenv(API_TOKEN_ENV_VAR, "env-token")
        assert Workspace().provider_config().token == "env-token"
