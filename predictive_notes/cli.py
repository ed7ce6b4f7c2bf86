"""
cli.py - command line companion for the notes editor
Features:
- list / search / create / delete / export notes
- show and change preferences
- inspect the bigram model and the suggestion for a word
- open the Textual editor
- Uses Rich for tables and formatting
"""

import argparse
import os
import sys
from typing import List, Optional

# ui styling with Rich
from rich import box
from rich.console import Console
from rich.table import Table

from predictive_notes.core.ngram_model import build_from_text
from predictive_notes.core.predictor import PredictionPolicy, laplace_probabilities, predict
from predictive_notes.errors import ConfigError, StorageError
from predictive_notes.storage.kv_store import JsonFileStore
from predictive_notes.storage.notes import NoteStore, export_filename, sorted_notes
from predictive_notes.storage.preferences import (
    PREFERENCE_DEFAULTS,
    STORED_ONLY,
    load_preferences,
    set_preference,
)
from predictive_notes.utils.config_manager import Config
from predictive_notes.utils.logger_utils import Log

# initialise console for rich output
console = Console()


class CLI:
    """Dispatches parsed arguments to note, preference and model commands."""

    def __init__(self, config: Optional[Config] = None):
        self.cfg = config or Config()
        Log.configure(path=self.cfg["log_path"])
        self.store = JsonFileStore(self.cfg["store_path"])
        self.notes = NoteStore(self.store, title_max_length=int(self.cfg["title_max_length"]))

    # NOTES -------------------------------------------------------------------------
    def notes_list(self, sort: Optional[str] = None, query: Optional[str] = None) -> int:
        try:
            self.notes.purge_empty()
        except StorageError as e:
            Log.error(f"[CLI] purge of empty notes failed: {e}")
        found = self.notes.search(query) if query else self.notes.all()
        order = sort or load_preferences(self.store).sorting
        found = sorted_notes(found, order)

        if not found:
            console.print("[dim](no notes)[/dim]")
            return 0

        table = Table(title=f"Notes ({order})", box=box.SIMPLE)
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("Modified", style="dim")
        for note in found:
            table.add_row(note.id, note.title or "[dim]Untitled[/dim]", note.modified)
        console.print(table)
        return 0

    def notes_new(self, text: str, url: Optional[str] = None) -> int:
        note = self.notes.create(text, source_url=url)
        if note is None:
            console.print("[red]Nothing to save.[/red]")
            return 1
        console.print(f"[green]Created:[/green] {note.id}  {note.title}")
        return 0

    def notes_delete(self, note_id: str) -> int:
        if not self.notes.delete(note_id):
            console.print(f"[red]No note with id[/red] {note_id}")
            return 1
        console.print(f"[yellow]Deleted[/yellow] {note_id}")
        return 0

    def notes_export(self, folder: str) -> int:
        notes = self.notes.all()
        if not notes:
            console.print("[dim](no notes to export)[/dim]")
            return 0
        os.makedirs(folder, exist_ok=True)
        for note in notes:
            path = os.path.join(folder, export_filename(note) + ".txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write(note.text)
            console.print(f"exported -> {path}")
        return 0

    # PREFERENCES ------------------------------------------------------------------
    def prefs_show(self) -> int:
        stored = load_preferences(self.store).to_stored()
        table = Table(title="Preferences", box=box.SIMPLE)
        table.add_column("Name", style="cyan")
        table.add_column("Type", style="dim")
        table.add_column("Value")
        for name, entry in stored.items():
            value = str(entry["status"])
            if name in STORED_ONLY:
                value += " [dim](stored only)[/dim]"
            table.add_row(name, entry["type"], value)
        console.print(table)
        return 0

    def prefs_set(self, name: str, value: str) -> int:
        try:
            set_preference(self.store, name, value)
        except KeyError:
            console.print(f"[red]Unknown preference:[/red] {name} "
                          f"(one of {', '.join(PREFERENCE_DEFAULTS)})")
            return 1
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            return 1
        console.print(f"[green]{name}[/green] = {value}")
        return 0

    # MODEL -------------------------------------------------------------------------
    def predict(self, word: str, text: str) -> int:
        model = build_from_text(text, int(self.cfg["ngram_order"]))
        if not model:
            console.print("[dim](not enough text to build a model)[/dim]")
            return 0

        candidates = model.get(word.lower(), [])
        if not candidates:
            console.print(f"[dim](no suggestion after '{word}')[/dim]")
            return 0

        k = float(self.cfg["smoothing_k"])
        table = Table(title=f"Continuations of '{word}'", box=box.SIMPLE)
        table.add_column("Word", style="cyan")
        table.add_column("Count", justify="right")
        table.add_column("P (laplace)", justify="right", style="dim")
        for cand, p in zip(candidates, laplace_probabilities(candidates, k)):
            table.add_row(cand.word, str(cand.count), f"{p:.3f}")
        console.print(table)

        policy = PredictionPolicy(self.cfg["prediction_policy"])
        choice = predict(word, model, policy=policy, k=k)
        console.print(f"Suggestion ({policy.value}): [green]{choice[0].word}[/green]")
        return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="predictive-notes", description="Local notes with next-word prediction")
    p.add_argument("--config", default="config.json", help="path to config.json")
    sub = p.add_subparsers(dest="cmd", required=True)

    notes = sub.add_parser("notes", help="manage notes")
    nsub = notes.add_subparsers(dest="action", required=True)
    ls = nsub.add_parser("list", help="list notes")
    ls.add_argument("--sort", choices=("modified", "created", "title"))
    search = nsub.add_parser("search", help="find notes containing text")
    search.add_argument("query")
    new = nsub.add_parser("new", help="create a note from text")
    new.add_argument("text")
    new.add_argument("--url", help="source page appended to the note")
    delete = nsub.add_parser("delete", help="delete a note")
    delete.add_argument("note_id")
    export = nsub.add_parser("export", help="write every note to a .txt file")
    export.add_argument("folder")

    prefs = sub.add_parser("prefs", help="show or change preferences")
    psub = prefs.add_subparsers(dest="action", required=True)
    psub.add_parser("show")
    pset = psub.add_parser("set", help="set a preference (spellcheck is stored only, the editor has no spell checker)")
    pset.add_argument("name")
    pset.add_argument("value")

    pred = sub.add_parser("predict", help="show the suggestion after a word")
    pred.add_argument("word")
    src = pred.add_mutually_exclusive_group()
    src.add_argument("--file", help="text file to model")
    src.add_argument("--note", help="note id to model")

    edit = sub.add_parser("edit", help="open the terminal editor")
    edit.add_argument("note_id", nargs="?")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = Config(args.config)
    except (OSError, ConfigError) as e:
        console.print(f"[red]config error:[/red] {e}")
        return 2
    cli = CLI(cfg)

    try:
        if args.cmd == "notes":
            if args.action == "list":
                return cli.notes_list(sort=args.sort)
            if args.action == "search":
                return cli.notes_list(query=args.query)
            if args.action == "new":
                return cli.notes_new(args.text, args.url)
            if args.action == "delete":
                return cli.notes_delete(args.note_id)
            return cli.notes_export(args.folder)

        if args.cmd == "prefs":
            if args.action == "show":
                return cli.prefs_show()
            return cli.prefs_set(args.name, args.value)

        if args.cmd == "predict":
            if args.file:
                with open(args.file, "r", encoding="utf-8") as f:
                    text = f.read()
            elif args.note:
                note = cli.notes.find(args.note)
                if note is None:
                    console.print(f"[red]No note with id[/red] {args.note}")
                    return 1
                text = note.text
            else:
                text = sys.stdin.read()
            return cli.predict(args.word, text)

        # edit: imported lazily so the plain commands never load textual
        from predictive_notes.tui_app import run_editor
        run_editor(args.note_id, cfg)
        return 0
    except StorageError as e:
        Log.error(f"[CLI] {e}")
        console.print(f"[red]storage error:[/red] {e}")
        return 1
    except OSError as e:
        console.print(f"[red]err:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
