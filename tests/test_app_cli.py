from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from munj.app_cli import _build_resources, _build_rng, build_namespace, evaluate, main
from munj.http_resource_client import HttpResourceClient
from munj.resource_client import Resources


def test_build_resources_defaults() -> None:
    with patch.dict(os.environ, {}, clear=True):
        resources = _build_resources()
        assert isinstance(resources.http, HttpResourceClient)
        assert resources.http.timeout == 15.0
        assert resources.encoding == "UTF-8"


def test_build_resources_respects_env() -> None:
    env = {"MUNJ_TIMEOUT_SECS": "30.0", "MUNJ_ENCODING": "latin-1"}
    with patch.dict(os.environ, env, clear=True):
        resources = _build_resources()
        assert resources.http.timeout == 30.0
        assert resources.encoding == "latin-1"
        assert _build_resources("cp1252").encoding == "cp1252"


def test_build_resources_bad_timeout_falls_back() -> None:
    with patch.dict(os.environ, {"MUNJ_TIMEOUT_SECS": "soon"}, clear=True):
        assert _build_resources().http.timeout == 15.0


def test_build_rng_seeded_from_env() -> None:
    with patch.dict(os.environ, {"MUNJ_SEED": "42"}, clear=True):
        assert _build_rng().random() == _build_rng().random()


def test_evaluate_uses_munj_names() -> None:
    ns = build_namespace(Resources(), _build_rng())
    assert list(evaluate("zip([1, 2], ['a'])", ns)) == [(1, "a"), (2, ns["ABSENT"])]
    assert evaluate("sum(range(1, 4))", ns) == 6.0
    assert evaluate("length(filter(lambda x: x > 2, [1, 2, 3, 4]))", ns) == 2


def test_main_renders_bracketed_list(capsys) -> None:
    main(["--color", "never", "take(3, range(0, 10))"])
    assert capsys.readouterr().out == "[\n  0,\n  1,\n  2\n]\n"


def test_main_line_mode(capsys) -> None:
    main(["--lines", "map(lambda x: x * 2, take(3, range(0, 10)))"])
    assert capsys.readouterr().out == "0\n2\n4\n"


def test_main_group_reduce(capsys) -> None:
    main(["--color", "never", 'group_reduce(lambda x: "odd" if x % 2 else "even", lambda a, x: a + x, 0, range(1, 6))'])
    assert capsys.readouterr().out == '{\n  "odd": 9,\n  "even": 6\n}\n'


def test_main_reads_records_from_file(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "people.tsv").write_text("ann\t31\nbob\t27\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    main(["--lines", "oal(map(lambda r: (r[1], r[0]), ila('people.tsv')), ',')"])
    assert capsys.readouterr().out == "31,ann\n27,bob\n"


def test_main_lists_directory(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "x.txt").write_text("")
    monkeypatch.chdir(tmp_path)
    main(["--lines", "find('.')"])
    assert capsys.readouterr().out == "sub\nx.txt\n"


def test_main_reports_munj_errors(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["min([])"])
    assert exc_info.value.code == 1
    assert "munj: error: min(): sequence is already exhausted" in capsys.readouterr().err


def test_main_reports_syntax_errors(capsys) -> None:
    with pytest.raises(SystemExit):
        main(["take(3,"])
    assert "munj: error:" in capsys.readouterr().err


def test_main_missing_file(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        main(["lines('absent.txt')"])
    assert "unable to open" in capsys.readouterr().err


def test_main_notes_disabled_colors_in_auto_mode(capsys) -> None:
    with patch.dict(os.environ, {}, clear=True):
        main(["--color", "auto", "1"])
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "[colors disabled: piped output or NO_COLOR set]" in captured.err


def test_main_quiet_about_colors_when_never(capsys) -> None:
    main(["--color", "never", "1"])
    assert capsys.readouterr().err == ""


def test_main_reports_unknown_encoding(tmp_path: Path, monkeypatch, capsys) -> None:
    (tmp_path / "a.txt").write_text("a\n")
    monkeypatch.chdir(tmp_path)
    with pytest.raises(SystemExit):
        main(["lines('a.txt', 'no-such-codec')"])
    assert "munj: error: unknown encoding: no-such-codec" in capsys.readouterr().err
