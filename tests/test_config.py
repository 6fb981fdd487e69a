"""Tests for project configuration loading and default resolution."""

import dataclasses
from pathlib import Path

import pytest

from ringwar.config import (
    BuildConfig,
    FilterSpec,
    ResourceRef,
    ServletSpec,
    default_servlet_class,
    default_servlet_name,
    default_war_name,
    handler_namespace,
    load_config,
)
from ringwar.exceptions import ConfigError


class TestDefaults:
    def test_default_war_name(self):
        assert default_war_name("myapp", "0.1.0") == "myapp-0.1.0.war"

    def test_default_servlet_name(self):
        assert default_servlet_name("myapp.core/handler") == "myapp.core/handler servlet"

    @pytest.mark.parametrize(
        "handler, expected",
        [
            ("myapp.core/handler", "myapp.servlet"),
            ("my-app.web.routes/app", "my_app.web.servlet"),
            ("single/handler", "servlet"),
        ],
    )
    def test_default_servlet_class(self, handler, expected):
        assert default_servlet_class(handler) == expected

    @pytest.mark.parametrize("handler", ["handler", "/handler", "myapp.core/"])
    def test_handler_without_namespace(self, handler):
        with pytest.raises(ConfigError, match="namespace/function"):
            handler_namespace(handler)


class TestBuildConfig:
    def test_minimal_project(self, tmp_path):
        config = BuildConfig.from_mapping(
            {"name": "myapp", "version": "0.1.0", "ring": {"handler": "myapp.core/handler"}}, tmp_path
        )

        assert config.war_name == "myapp-0.1.0.war"
        assert config.servlet_name == "myapp.core/handler servlet"
        assert config.servlet_class == "myapp.servlet"
        assert config.url_pattern == "/*"
        assert config.servlet_path_info is True
        assert config.war_exclusions == ()
        assert config.compile_command is None
        assert config.target_dir == tmp_path / "target"
        assert config.compile_path == tmp_path / "target" / "classes"
        assert config.source_path == tmp_path / "src"
        assert config.resources_path == tmp_path / "resources"
        assert config.war_resources_path == tmp_path / "war-resources"

    def test_war_name_override(self, make_config):
        assert make_config(ring={"war-name": "ROOT.war"}).war_name == "ROOT.war"

    def test_overrides(self, make_config):
        config = make_config(
            ring={
                "servlet-name": "app",
                "servlet-class": "com.example.App",
                "url-pattern": "/app/*",
                "servlet-path-info?": False,
            }
        )
        assert config.servlet_name == "app"
        assert config.servlet_class == "com.example.App"
        assert config.url_pattern == "/app/*"
        assert config.servlet_path_info is False

    def test_servlet_namespace(self, make_config):
        assert make_config(ring={"handler": "my-app.core/handler"}).servlet_namespace == "my-app.servlet"

    def test_handler_optional_with_explicit_servlet(self, tmp_path):
        config = BuildConfig.from_mapping(
            {"name": "a", "version": "1", "ring": {"servlet-name": "s", "servlet-class": "com.S"}}, tmp_path
        )
        assert config.handler is None
        assert config.servlet_class == "com.S"

    def test_paths(self, make_config, tmp_path):
        config = make_config(**{"target-dir": "out", "compile-path": "out/classes", "war-resources-path": None})
        assert config.target_dir == tmp_path / "out"
        assert config.compile_path == tmp_path / "out" / "classes"
        assert config.war_resources_path is None

    def test_compile_command(self, make_config):
        assert make_config(**{"compile-command": ["make", "classes"]}).compile_command == ("make", "classes")
        assert make_config(**{"compile-command": "./build.sh"}).compile_command == ("./build.sh",)

    def test_war_exclusions_compiled(self, make_config):
        config = make_config(ring={"war-exclusions": [r"\.scss$"]})
        assert config.war_exclusions[0].search("site.scss")

    def test_webxml_records(self, make_config):
        config = make_config(
            ring={
                "webxml": {
                    "filters": [{"name": "gzip", "class": "com.Gzip"}],
                    "listeners": ["com.L"],
                    "servlets": [{"name": "a", "class": "A", "load-on-startup": 1}],
                    "resource-refs": [{"name": "jdbc/x", "type": "javax.sql.DataSource", "auth": "Application"}],
                }
            }
        )
        assert config.webxml.filters == (FilterSpec("gzip", "com.Gzip"),)
        assert config.webxml.listeners == ("com.L",)
        assert config.webxml.servlets == (ServletSpec("a", "A", 1),)
        assert config.webxml.resource_refs == (ResourceRef("jdbc/x", "javax.sql.DataSource", "Application", None),)
        assert config.webxml.filter_mappings == ()

    def test_immutable(self, make_config):
        config = make_config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.war_name = "other.war"

    @pytest.mark.parametrize(
        "project, message",
        [
            ({"version": "1", "ring": {"handler": "a.b/c"}}, "'name' is required"),
            ({"name": "a", "ring": {"handler": "a.b/c"}}, "'version' is required"),
            ({"name": "a", "version": "1"}, "'ring.handler' is required"),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c", "war-exclusions": ["("]}}, "war-exclusions"),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c", "webxml": {"filters": {}}}}, "must be a list"),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c", "webxml": {"servlets": ["x"]}}}, "mapping"),
            ({"name": "a", "version": "1", "ring": ["handler"]}, "'ring' must be a mapping"),
            (
                {"name": "a", "version": "1", "ring": {"handler": "a.b/c", "webxml": {"listeners": [{"class": "X"}]}}},
                "Entry 0 of 'listeners' must be a class name",
            ),
            (
                {"name": "a", "version": "1", "ring": {"handler": "a.b/c", "webxml": {"listeners": ["A", ["B"]]}}},
                "Entry 1 of 'listeners'",
            ),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c", "servlet-path-info?": "no"}}, "true or false"),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c", "servlet-path-info?": 0}}, "true or false"),
            ({"name": "a", "version": "1", "ring": {"handler": "a.b/c"}, "target-dir": None}, "cannot be null"),
        ],
    )
    def test_invalid_projects(self, project, message):
        with pytest.raises(ConfigError, match=message):
            BuildConfig.from_mapping(project)


class TestLoadConfig:
    def test_load_yaml(self, tmp_path):
        project_file = tmp_path / "ringwar.yaml"
        project_file.write_text(
            "name: myapp\n"
            "version: 0.1.0\n"
            "ring:\n"
            "  handler: myapp.core/handler\n"
            "  war-exclusions: ['\\.scss$']\n"
            "  webxml:\n"
            "    resource-refs:\n"
            "      - {name: jdbc/main, type: javax.sql.DataSource}\n"
        )
        config = load_config(project_file)

        assert config.name == "myapp"
        assert config.version == "0.1.0"
        assert config.project_root == tmp_path
        assert config.compile_path == tmp_path / "target" / "classes"
        assert config.war_exclusions[0].pattern == r"\.scss$"
        assert config.webxml.resource_refs[0].name == "jdbc/main"

    def test_numeric_version(self, tmp_path):
        project_file = tmp_path / "ringwar.yaml"
        project_file.write_text("name: myapp\nversion: 1.5\nring: {handler: myapp.core/handler}\n")
        assert load_config(project_file).war_name == "myapp-1.5.war"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read project file"):
            load_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        project_file = tmp_path / "ringwar.yaml"
        project_file.write_text("name: [unclosed\n")
        with pytest.raises(ConfigError, match="Cannot parse project file"):
            load_config(project_file)

    def test_empty_file(self, tmp_path):
        project_file = tmp_path / "ringwar.yaml"
        project_file.write_text("")
        with pytest.raises(ConfigError, match="'name' is required"):
            load_config(project_file)

    def test_relative_file_resolves_against_its_directory(self, tmp_path, monkeypatch):
        (tmp_path / "deploy").mkdir()
        (tmp_path / "deploy" / "ringwar.yaml").write_text(
            "name: a\nversion: '1'\nring: {handler: a.core/h}\nsource-path: ../src\n"
        )
        monkeypatch.chdir(tmp_path)
        config = load_config("deploy/ringwar.yaml")
        assert config.source_path == Path("deploy") / ".." / "src"


def test_servlet_path_info_false_from_yaml(tmp_path):
    project_file = tmp_path / "ringwar.yaml"
    project_file.write_text("name: a\nversion: '1'\nring: {handler: a.core/h, \"servlet-path-info?\": false}\n")
    assert load_config(project_file).servlet_path_info is False


def test_quoted_servlet_path_info_rejected(tmp_path):
    project_file = tmp_path / "ringwar.yaml"
    project_file.write_text("name: a\nversion: '1'\nring: {handler: a.core/h, \"servlet-path-info?\": 'false'}\n")
    with pytest.raises(ConfigError, match="servlet-path-info"):
        load_config(project_file)
