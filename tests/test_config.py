"""Reporter options loading/validation tests."""

import json
from pathlib import Path

from newman_junit_full.config import DEFAULT_OPTIONS, load_options, validate_options
from newman_junit_full.utils import deep_merge, get_path


class TestLoadOptions:
    def test_defaults(self) -> None:
        assert load_options() == DEFAULT_OPTIONS

    def test_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"export": "reports/junit.xml"}))
        assert load_options(path)["export"] == "reports/junit.xml"

    def test_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "options.yml"
        path.write_text("export: reports/from-yaml.xml\n")
        assert load_options(path)["export"] == "reports/from-yaml.xml"

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_options(tmp_path / "nope.json") == DEFAULT_OPTIONS

    def test_corrupt_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text("{not json")
        assert load_options(path) == DEFAULT_OPTIONS

    def test_overrides_win(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"export": "from-file.xml"}))
        assert load_options(path, {"export": "from-flag.xml"})["export"] == "from-flag.xml"

    def test_none_override_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"export": "from-file.xml"}))
        assert load_options(path, {"export": None})["export"] == "from-file.xml"


class TestValidation:
    def test_defaults_valid(self) -> None:
        assert validate_options(DEFAULT_OPTIONS) == []

    def test_unknown_key(self) -> None:
        errors = validate_options({"export": None, "colour": "red"})
        assert any("colour" in e for e in errors)

    def test_export_type(self) -> None:
        errors = validate_options({"export": 42})
        assert any("export" in e for e in errors)

    def test_blank_export(self) -> None:
        assert validate_options({"export": "  "}) != []


class TestUtils:
    def test_get_path(self) -> None:
        data = {"run": {"stats": {"tests": {"total": 4}}}}
        assert get_path(data, "run.stats.tests.total") == 4
        assert get_path(data, "run.missing.total", "unknown") == "unknown"
        assert get_path({"a": None}, "a", 0) == 0
        assert get_path({"a": [1]}, "a.b") is None

    def test_deep_merge(self) -> None:
        base = {"a": {"x": 1, "y": 2}}
        result = deep_merge(base, {"a": {"y": 3}})
        assert result == {"a": {"x": 1, "y": 3}}
        assert base == {"a": {"x": 1, "y": 2}}
