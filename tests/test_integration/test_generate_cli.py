"""End-to-end tests for ``swagts generate`` and the root callback."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from swagts import __version__
from swagts.app import app, main


def _write_spec(directory: Path, spec: dict) -> Path:
    path = directory / "swagger.json"
    path.write_text(json.dumps(spec), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Root callback
# ---------------------------------------------------------------------------


class TestRoot:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"swagts {__version__}" in result.output

    def test_help_lists_commands(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "inspect" in result.output


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_writes_all_files(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(
            app, ["--no-color", "generate", str(petstore_path), "--dist", "out"]
        )
        assert result.exit_code == 0, result.output

        out = isolated_config / "out"
        assert (out / "APIRequest.ts").is_file()
        assert sorted(p.name for p in (out / "models").iterdir()) == [
            "Category.ts",
            "Error.ts",
            "NewPet.ts",
            "Node.ts",
            "Pet.ts",
        ]
        assert sorted(p.name for p in (out / "requests").iterdir()) == [
            "addPet.ts",
            "getPetsByPetId.ts",
            "getTree.ts",
            "listPets.ts",
            "putPetsByPetId.ts",
            "uploadFile.ts",
        ]
        assert f"Generate: {(out / 'models' / 'Pet.ts').resolve()}" in result.output
        assert "Generated 12 files (5 definitions, 6 operations)" in result.output

    def test_deprecated_operation_warning(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generate", str(petstore_path)])
        assert result.exit_code == 0, result.output
        assert "deletePet" in result.output
        assert not (isolated_config / "requests" / "deletePet.ts").exists()

    def test_naming_and_directories(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            [
                "--quiet",
                "generate",
                str(petstore_path),
                "--naming",
                "camel",
                "--definition-dir",
                "types",
                "--operation-dir",
                "api",
            ],
        )
        assert result.exit_code == 0, result.output
        pet = (isolated_config / "types" / "Pet.ts").read_text(encoding="utf-8")
        assert "photoUrls?: Array<string>;" in pet
        request = (isolated_config / "api" / "listPets.ts").read_text(encoding="utf-8")
        assert 'import { Pet } from "../types/Pet";' in request

    def test_project_config_file(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        (isolated_config / "swagts.json").write_text(
            json.dumps({"dist": "from-config"}), encoding="utf-8"
        )
        result = cli_runner.invoke(app, ["--quiet", "generate", str(petstore_path)])
        assert result.exit_code == 0, result.output
        assert (isolated_config / "from-config" / "APIRequest.ts").is_file()

    def test_custom_definition_template(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        template = isolated_config / "definition.j2"
        template.write_text("// custom\nexport type {{ type_name }} = any;\n", encoding="utf-8")
        result = cli_runner.invoke(
            app,
            ["--quiet", "generate", str(petstore_path), "--definition-template", str(template)],
        )
        assert result.exit_code == 0, result.output
        content = (isolated_config / "models" / "Node.ts").read_text(encoding="utf-8")
        assert content == "// custom\nexport type Node = any;\n"

    def test_spec_from_stdin(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["--quiet", "generate", "-"],
            input=petstore_path.read_text(encoding="utf-8"),
        )
        assert result.exit_code == 0, result.output
        assert (isolated_config / "requests" / "getTree.ts").is_file()

    def test_dry_run_writes_nothing(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(
            app, ["--no-color", "generate", str(petstore_path), "--dist", "out", "--dry-run"]
        )
        assert result.exit_code == 0, result.output
        assert "File\tBytes" in result.output
        assert str(Path("out") / "models" / "Pet.ts") in result.output
        assert not (isolated_config / "out").exists()


class TestGenerateErrors:
    def test_unsupported_version_exits_7(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        spec = _write_spec(isolated_config, {"swagger": "1.2", "paths": {}})
        result = cli_runner.invoke(app, ["--no-color", "generate", str(spec)])
        assert result.exit_code == 7
        assert "Error: Only 2.0 is supported. Your version: 1.2" in result.output
        assert not (isolated_config / "APIRequest.ts").exists()

    def test_missing_file_exits_7(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generate", "missing.json"])
        assert result.exit_code == 7
        assert "Spec file not found" in result.output

    def test_unresolved_reference_exits_8(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        spec = _write_spec(
            isolated_config,
            {
                "swagger": "2.0",
                "paths": {},
                "definitions": {"Owner": {"properties": {"pet": {"$ref": "#/definitions/Pet"}}}},
            },
        )
        result = cli_runner.invoke(app, ["--no-color", "generate", str(spec)])
        assert result.exit_code == 8
        assert "Unresolved reference 'Pet' in 'Owner'" in result.output
        assert not (isolated_config / "models").exists()

    def test_invalid_naming_exits_2(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(app, ["generate", str(petstore_path), "--naming", "kebab"])
        assert result.exit_code == 2

    def test_missing_template_exits_1(
        self, cli_runner: CliRunner, isolated_config: Path, petstore_path: Path
    ) -> None:
        result = cli_runner.invoke(
            app,
            ["--no-color", "generate", str(petstore_path), "--operation-template", "nope.j2"],
        )
        assert result.exit_code == 1
        assert "Template file not found" in result.output


# ---------------------------------------------------------------------------
# Console-script entry point
# ---------------------------------------------------------------------------


class TestMain:
    def test_unexpected_error_writes_crash_log(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _boom() -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr("swagts.app._setup_signal_handlers", lambda: None)
        monkeypatch.setattr("swagts.app.app", _boom)
        monkeypatch.setattr("swagts.config._is_xdg_platform", lambda: True)

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        logs = list((isolated_config / "data" / "swagts" / "logs").iterdir())
        assert len(logs) == 1
        assert "RuntimeError: boom" in logs[0].read_text()
