"""CLI for PassMeter — score, generate, and an interactive session with history export."""

import argparse
from getpass import getpass

from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .config import configure_logging, load_config
from .evaluator import score_password
from .generator import generate
from .history import SessionHistory
from .storage import export_history_csv
from .suggestions import format_suggestions
from .worker import GenerationWorker

SESSION_HELP = (
    "Type a password and press Enter to score and record it.\n"
    "Commands: :gen [LENGTH]  :history  :export PATH  :help  :quit"
)


def print_result(pw: str) -> None:
    result = score_password(pw)
    header = f"Score: {result.score} / 100 — {result.label}"
    body = f"Estimated entropy: {result.entropy:.1f} bits\n\n" + format_suggestions(result.suggestions)
    print(Panel(body, title=header))


def cmd_score(args):
    print_result(args.password)


def cmd_generate(args):
    for i in range(args.copies):
        try:
            pw = generate(length=args.length)
        except ValueError as e:
            print(f"[red]Cannot generate: {e}[/red]")
            return
        result = score_password(pw)
        print(f"[bold green]Password #{i+1}:[/bold green] {escape(pw)}  ({result.score}/100, {result.label})")


# Session subcommand

def print_history(history: SessionHistory) -> None:
    if not len(history):
        print("[yellow]History is empty.[/yellow]")
        return
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", width=4)
    table.add_column("Password")
    table.add_column("Score", justify="right")
    table.add_column("Verdict")
    table.add_column("Time")
    for e in history:
        table.add_row(str(e.index), escape(e.masked), str(e.score), e.verdict.value, e.timestamp.strftime("%H:%M:%S"))
    print(table)


def export_history(history: SessionHistory, path: str) -> None:
    try:
        export_history_csv(history.export_records(), path)
        print(f"[green]Exported {len(history)} entries to:[/green] {escape(path)}")
    except OSError as e:
        print(f"[red]Failed to export history: {escape(str(e))}[/red]")


def run_session(history: SessionHistory, worker: GenerationWorker, default_length: int, read=getpass) -> None:
    print(SESSION_HELP)
    while True:
        try:
            line = read("Password: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if line.startswith(":"):
            cmd, _, arg = line[1:].partition(" ")
            arg = arg.strip()
            if cmd in ("quit", "q"):
                return
            elif cmd == "help":
                print(SESSION_HELP)
            elif cmd == "history":
                print_history(history)
            elif cmd == "export":
                if not arg:
                    print("[red]Please provide a path: :export PATH[/red]")
                else:
                    export_history(history, arg)
            elif cmd == "gen":
                try:
                    length = int(arg) if arg else default_length
                    pw = worker.submit(length).result()
                except ValueError as e:
                    print(f"[red]Cannot generate: {e}[/red]")
                    continue
                entry = history.commit(pw)
                print(f"[bold green]Generated #{entry.index}:[/bold green] {escape(pw)}")
                print_result(pw)
            else:
                print(f"[red]Unknown command: {escape(cmd)}[/red]")
            continue

        result = score_password(line)
        if not result.is_valid:
            print(f"[red]{result.label}[/red]")
            continue
        entry = history.commit(line, result)
        print(f"[dim]Recorded #{entry.index}[/dim]")
        print_result(line)


def cmd_session(args):
    cfg = load_config()
    history = SessionHistory(mask_char=cfg.get("mask_char") or "•")
    worker = GenerationWorker()
    try:
        run_session(history, worker, int(cfg.get("default_length", 26)))
    finally:
        worker.shutdown()
    if args.export and len(history):
        export_history(history, args.export)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="passmeter")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sc = sub.add_parser("score", help="Score a password and show suggestions")
    sc.add_argument("password", type=str, help="Password to evaluate (wrap in quotes)")
    sc.set_defaults(func=cmd_score)

    gen = sub.add_parser("generate", help="Generate one or more max-score passwords")
    gen.add_argument("--length", type=int, default=None, help="Password length")
    gen.add_argument("--copies", type=int, default=1, help="How many passwords to generate")
    gen.set_defaults(func=cmd_generate)

    se = sub.add_parser("session", help="Interactive scoring session with history")
    se.add_argument("--export", "-o", type=str, help="Write history as CSV to this path on exit")
    se.set_defaults(func=cmd_session)

    args = parser.parse_args(argv)
    cfg = load_config()
    configure_logging("DEBUG" if args.verbose else cfg.get("log_level"))
    if getattr(args, "length", None) is None and args.cmd == "generate":
        args.length = int(cfg.get("default_length", 26))
    args.func(args)


if __name__ == "__main__":
    main()
