# test_cli.py - end to end runs of the command line through main()

import io
import json

import pytest

from predictive_notes.cli import main


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def stored_notes(workdir):
    data = json.loads((workdir / "data" / "notes_store.json").read_text(encoding="utf-8"))
    return data["notes"]


def test_new_list_delete(workdir, capsys):
    assert main(["notes", "new", "Groceries\nmilk and eggs"]) == 0
    notes = stored_notes(workdir)
    assert notes[0]["title"] == "Groceries"
    assert (workdir / "config.json").exists()

    assert main(["notes", "list", "--sort", "title"]) == 0
    assert "Groceries" in capsys.readouterr().out

    assert main(["notes", "delete", notes[0]["id"]]) == 0
    assert stored_notes(workdir) == []
    assert main(["notes", "delete", "missing"]) == 1


def test_new_with_empty_text_fails(workdir):
    assert main(["notes", "new", ""]) == 1


def test_search(workdir, capsys):
    main(["notes", "new", "alpha beta"])
    main(["notes", "new", "gamma"])
    capsys.readouterr()
    assert main(["notes", "search", "BETA"]) == 0
    out = capsys.readouterr().out
    assert "alpha beta" in out
    assert "gamma" not in out


def test_export(workdir):
    main(["notes", "new", "Trip plan\nday one"])
    assert main(["notes", "export", "out"]) == 0
    files = list((workdir / "out").iterdir())
    assert len(files) == 1
    assert files[0].name.startswith("Trip_plan_")
    assert files[0].read_text(encoding="utf-8") == "Trip plan\nday one"


def test_prefs(workdir, capsys):
    assert main(["prefs", "set", "predictive", "false"]) == 0
    assert main(["prefs", "set", "sorting", "size"]) == 1
    assert main(["prefs", "set", "fontSize", "3"]) == 1
    capsys.readouterr()
    assert main(["prefs", "show"]) == 0
    out = capsys.readouterr().out
    assert "predictive" in out
    assert "stored only" in out


def test_predict_from_file_and_stdin(workdir, capsys, monkeypatch):
    sample = workdir / "sample.txt"
    sample.write_text("the cat sat on the mat the cat ran", encoding="utf-8")
    assert main(["predict", "the", "--file", str(sample)]) == 0
    out = capsys.readouterr().out
    assert "Suggestion (max_frequency): cat" in out

    monkeypatch.setattr("sys.stdin", io.StringIO("one"))
    assert main(["predict", "one"]) == 0
    assert "not enough text" in capsys.readouterr().out


def test_predict_from_unknown_note(workdir):
    assert main(["predict", "the", "--note", "missing"]) == 1


def test_missing_file_is_reported(workdir):
    assert main(["predict", "the", "--file", "nope.txt"]) == 1


def test_corrupt_store_is_reported(workdir):
    (workdir / "data").mkdir()
    (workdir / "data" / "notes_store.json").write_text("oops", encoding="utf-8")
    assert main(["notes", "new", "text"]) == 1


def test_bad_config_values_fall_back_to_defaults(workdir, capsys):
    (workdir / "config.json").write_text(json.dumps({"prediction_policy": "greedy"}))
    sample = workdir / "words.txt"
    sample.write_text("the cat sat on the mat the cat ran", encoding="utf-8")
    assert main(["predict", "the", "--file", str(sample)]) == 0
    assert "Suggestion (max_frequency): cat" in capsys.readouterr().out
