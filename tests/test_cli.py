"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from restmap.cli import _build_parser, main

PING_CONTROLLER = """@RestController
@RequestMapping("/api")
public class PingController {
    @GetMapping("/ping")
    public String ping() {
        return "pong";
    }
}
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "PingController.java").write_text(PING_CONTROLLER, encoding="utf-8")
    return root


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "scan"])
    assert args.verbose is True
    assert args.command == "scan"
    assert args.path is None


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["info", "--verbose"])
    assert args.verbose is True
    assert args.command == "info"


def test_cli_accepts_scan_flags() -> None:
    parser = _build_parser()
    args = parser.parse_args(["scan", "some/dir", "--refresh", "--json", "--workers", "3"])
    assert args.path == "some/dir"
    assert args.refresh is True
    assert args.json is True
    assert args.workers == 3


def test_cli_rejects_non_positive_workers() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["scan", "--workers", "0"])


def test_cli_serve_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000


def test_scan_prints_route_table(project: Path, capsys) -> None:
    main(["scan", str(project)])

    out = capsys.readouterr().out.splitlines()
    assert out == ["GET     /api/ping  →  PingController.java:5"]


def test_scan_prints_json(project: Path, capsys) -> None:
    main(["scan", str(project), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert [item["full_path"] for item in payload] == ["/api/ping"]
    assert payload[0]["line"] == 5
    assert payload[0]["file"] == str((project / "src" / "PingController.java").resolve())


def test_scan_reports_empty_project(tmp_path: Path, capsys) -> None:
    main(["scan", str(tmp_path)])

    assert capsys.readouterr().out.strip() == "No endpoints found"


def test_info_and_clear(project: Path, capsys) -> None:
    main(["info", str(project)])
    assert capsys.readouterr().out.startswith("Cache: empty, endpoints: 0")

    main(["scan", str(project)])
    capsys.readouterr()

    main(["info", str(project)])
    assert capsys.readouterr().out.startswith("Cache: present, endpoints: 1")

    main(["clear", str(project)])
    assert capsys.readouterr().out.strip() == "Cache cleared"

    main(["clear", str(project)])
    assert capsys.readouterr().out.strip() == "Nothing to clear"


def test_scan_missing_path_exits_with_error(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(tmp_path / "missing")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_scan_invalid_config_exits_with_error(project: Path, capsys) -> None:
    (project / ".restmap.yml").write_text("- not\n- a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["scan", str(project)])

    assert excinfo.value.code == 1
    assert "restmap scan failed" in capsys.readouterr().err
