"""Interactive CLI application."""
import logging
import os
import time

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from ppl_tracker.assignments import get_assignment
from ppl_tracker.catalog import DAYS, PRIORITIES, STATUSES, SUBJECT_IDS, SUBJECTS, subject_label
from ppl_tracker.tracker import ActionResult, Tracker
from ppl_tracker.views import View, assignments_view, countdown_level, format_countdown

console = Console()

CATEGORY_STYLES = {"success": "green", "error": "red", "info": "cyan"}
LEVEL_STYLES = {"normal": "green", "warning": "yellow", "danger": "red"}


class FormCancelled(Exception):
    """Raised when the user types 'q' in the middle of a form."""


def form_prompt(prompt: str, **kwargs) -> str:
    """Prompt.ask wrapper that raises FormCancelled on 'q'."""
    result = Prompt.ask(prompt, **kwargs)
    if result is not None and result.strip().lower() == "q":
        raise FormCancelled()
    return result


def form_int_prompt(prompt: str, **kwargs) -> int:
    return int(form_prompt(prompt, **kwargs))


def show_result(result: ActionResult) -> None:
    style = CATEGORY_STYLES.get(result.category, "white")
    console.print(f"[{style}]{result.message}[/{style}]")


def show_welcome():
    console.print(Panel(
        "[bold]PPL Tracker[/bold]\n[dim]Suivi des révisions théoriques[/dim]",
        title="Bienvenue", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("dashboard", "Moyennes, devoirs urgents, statistiques"),
        ("devoirs", "Liste et gestion des devoirs"),
        ("emploi", "Emploi du temps de la semaine"),
        ("notes", "Historique des notes"),
        ("bacblanc", "Lancer un bac blanc chronométré"),
        ("reset", "Effacer toutes les données"),
        ("quit", "Quitter"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def ask_subject(default: str = None) -> str:
    for s in SUBJECTS:
        console.print(f"  [cyan]{s['id']:<6}[/cyan] {s['label']}")
    return form_prompt("Matière", choices=SUBJECT_IDS, default=default or SUBJECT_IDS[0])


def cmd_dashboard(tracker: Tracker):
    vm = tracker.view(View.DASHBOARD)
    avg = vm["global_average"]
    color = vm["ring_color"]
    bar_filled = int(avg / 5)
    bar = f"[{color}]{'█' * bar_filled}{'░' * (20 - bar_filled)}[/{color}]"
    console.print(Panel(f"Moyenne générale : [bold]{avg}%[/bold] {bar}", title="Tableau de bord", border_style="blue"))

    table = Table(title="Matières")
    table.add_column("Matière", style="cyan")
    table.add_column("Moyenne", justify="right")
    for s in vm["subjects"]:
        if s["average"] is None:
            table.add_row(s["label"], "–")
        else:
            style = "green" if s["status"] == "ok" else "red"
            table.add_row(s["label"], f"[{style}]{s['average']}%[/{style}]")
    console.print(table)

    if vm["urgent"]:
        console.print("\n[bold]Devoirs urgents :[/bold]")
        for u in vm["urgent"]:
            style = "red" if u["overdue"] else "yellow"
            console.print(f"  [{style}]●[/{style}] {u['title']} [dim]{u['due_date']}[/dim]")
    else:
        console.print("\n[green]Aucun devoir urgent 🎉[/green]")

    stats = vm["stats"]
    console.print(f"\n  Devoirs: [bold]{stats['assignments_total']}[/bold]  |  "
                  f"Terminés: [bold]{stats['assignments_done']}[/bold]  |  "
                  f"Bacs blancs: [bold]{stats['mock_exams']}[/bold]  |  "
                  f"Notes saisies: [bold]{stats['scores']}[/bold]")


def print_assignments(tracker: Tracker, subject_id: str = None, status: str = None):
    vm = assignments_view(tracker.state, tracker.clock(), subject_id=subject_id, status=status)
    if not vm["assignments"]:
        console.print("[dim]Aucun devoir pour l'instant.[/dim]")
        return
    table = Table(title="Devoirs")
    table.add_column("Id", style="dim")
    table.add_column("Titre")
    table.add_column("Matière", style="cyan")
    table.add_column("Échéance")
    table.add_column("Priorité")
    table.add_column("Statut")
    for a in vm["assignments"]:
        due = a["due_date"] or "–"
        if a["overdue"]:
            due = f"[red]⚠ En retard — {due}[/red]"
        elif a["urgent"]:
            due = f"[yellow]⚡ Urgent — {due}[/yellow]"
        title = f"[dim]{a['title']}[/dim]" if a["done"] else a["title"]
        table.add_row(a["id"], title, a["subject"], due, a["priority"], a["status"])
    console.print(table)


def ask_assignment_fields(existing=None) -> dict:
    return {
        "title": form_prompt("Titre", default=existing.title if existing else None),
        "subject_id": ask_subject(existing.subject_id if existing else None),
        "due_date": form_prompt("Échéance (AAAA-MM-JJ, vide = aucune)",
                                default=(existing.due_date or "") if existing else ""),
        "priority": form_prompt("Priorité", choices=list(PRIORITIES),
                                default=existing.priority if existing else "medium"),
        "status": form_prompt("Statut", choices=list(STATUSES),
                              default=existing.status if existing else "todo"),
    }


def cmd_assignments(tracker: Tracker):
    print_assignments(tracker)
    action = form_prompt("Action", choices=["add", "edit", "delete", "filter", "back"], default="back")
    if action == "add":
        show_result(tracker.add_assignment(**ask_assignment_fields()))
    elif action == "edit":
        assignment_id = form_prompt("Id du devoir")
        existing = get_assignment(tracker.state, assignment_id)
        if existing is None:
            console.print("[yellow]Devoir introuvable[/yellow]")
            return
        show_result(tracker.edit_assignment(assignment_id, **ask_assignment_fields(existing)))
    elif action == "delete":
        assignment_id = form_prompt("Id du devoir")
        if Prompt.ask("Supprimer ce devoir ?", choices=["y", "n"], default="n") == "y":
            show_result(tracker.delete_assignment(assignment_id))
    elif action == "filter":
        subject_id = form_prompt("Matière (vide = toutes)", default="")
        status = form_prompt("Statut (vide = tous)", default="")
        print_assignments(tracker, subject_id=subject_id or None, status=status or None)


def print_schedule(tracker: Tracker):
    vm = tracker.view(View.SCHEDULE)
    table = Table(title=vm["week_label"])
    table.add_column("", style="dim")
    for header in vm["headers"]:
        table.add_column(header)
    for row in vm["grid"]:
        cells = []
        for cell in row["cells"]:
            cells.append("\n".join(
                f"[{e['color']}]{e['subject'][:14]}[/{e['color']}]\n{e['start']}–{e['end']}"
                + (f"\n[dim]{e['description']}[/dim]" if e["description"] else "")
                for e in cell
            ))
        table.add_row(row["hour"], *cells)
    console.print(table)
    for e in vm["entries"]:
        console.print(f"  [dim]{e.id}[/dim] {DAYS[e.day_of_week]} {e.start}–{e.end} {subject_label(e.subject_id)}")


def cmd_schedule(tracker: Tracker):
    while True:
        print_schedule(tracker)
        action = form_prompt("Action", choices=["prev", "next", "add", "delete", "back"], default="back")
        if action == "prev":
            tracker.previous_week()
        elif action == "next":
            tracker.next_week()
        elif action == "add":
            for i, name in enumerate(DAYS):
                console.print(f"  [cyan]{i}[/cyan]) {name}")
            day = form_int_prompt("Jour", choices=[str(i) for i in range(7)], default="0")
            start = form_prompt("Début (HH:MM)", default="09:00")
            end = form_prompt("Fin (HH:MM)", default="10:00")
            subject_id = ask_subject()
            desc = form_prompt("Description", default="")
            show_result(tracker.add_entry(day, start, end, subject_id, desc))
        elif action == "delete":
            show_result(tracker.remove_entry(form_prompt("Id du créneau")))
        else:
            return


def cmd_scores(tracker: Tracker):
    vm = tracker.view(View.SCORES)
    table = Table(title="Historique des notes")
    table.add_column("Id", style="dim")
    table.add_column("Score", justify="right")
    table.add_column("Matière", style="cyan")
    table.add_column("Description")
    table.add_column("Date")
    for n in vm["history"]:
        style = "green" if n["passed"] else "red"
        table.add_row(n["id"], f"[{style}]{n['score']}%[/{style}]", n["subject"], n["description"], n["date"])
    console.print(table)
    earned = [b["label"] for b in vm["badges"] if b["earned"]]
    if earned:
        console.print(f"🏆 [bold]{', '.join(earned)}[/bold]")

    action = form_prompt("Action", choices=["add", "delete", "back"], default="back")
    if action == "add":
        subject_id = ask_subject()
        score = form_prompt("Score (0–100)")
        desc = form_prompt("Description", default="")
        show_result(tracker.add_score(subject_id, score, desc))
    elif action == "delete":
        show_result(tracker.delete_score(form_prompt("Id de la note")))


def run_countdown(total_seconds: int, sleep=time.sleep) -> int:
    """Count down one second at a time. Returns the seconds elapsed.

    Ctrl-C stops the countdown early.
    """
    remaining = total_seconds
    with Progress(TextColumn("{task.description}"), BarColumn(), console=console) as progress:
        task = progress.add_task(format_countdown(remaining), total=total_seconds, completed=total_seconds)
        try:
            while remaining > 0:
                sleep(1)
                remaining -= 1
                style = LEVEL_STYLES[countdown_level(remaining, total_seconds)]
                progress.update(task, completed=remaining,
                                description=f"[{style}]{format_countdown(remaining)}[/{style}]")
        except KeyboardInterrupt:
            pass
    return total_seconds - remaining


def cmd_mock_exam(tracker: Tracker):
    vm = tracker.view(View.MOCK_EXAMS)
    for b in vm["history"]:
        style = "green" if b["passed"] else "red"
        console.print(f"  [{style}]{b['score']}%[/{style}] {b['subject']} — {b['minutes']} min — {b['date']}")

    subject_id = ask_subject()
    minutes = IntPrompt.ask("Durée (minutes)", default=60)
    if minutes < 1:
        console.print("[red]Durée invalide[/red]")
        return
    total = minutes * 60
    console.print(f"\n[bold]{subject_label(subject_id)}[/bold] — Ctrl-C pour arrêter\n")
    elapsed = run_countdown(total)
    console.print(f"Matière : {subject_label(subject_id)} — Durée : {elapsed // 60} min")
    score = form_prompt("Score (0–100)")
    show_result(tracker.save_mock_exam(subject_id, score, total))


def cmd_reset(tracker: Tracker):
    if Prompt.ask("Effacer toutes les données ?", choices=["y", "n"], default="n") == "y":
        show_result(tracker.reset())


def setup_logging() -> None:
    logging.basicConfig(
        level=os.getenv("PPL_TRACKER_LOG_LEVEL", "WARNING").upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main():
    setup_logging()
    tracker = Tracker()
    show_welcome()

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="dashboard").strip().lower()
        try:
            if choice == "dashboard":
                cmd_dashboard(tracker)
            elif choice == "devoirs":
                cmd_assignments(tracker)
            elif choice == "emploi":
                cmd_schedule(tracker)
            elif choice == "notes":
                cmd_scores(tracker)
            elif choice == "bacblanc":
                cmd_mock_exam(tracker)
            elif choice == "reset":
                cmd_reset(tracker)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]Bons vols ![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except FormCancelled:
            console.print("[dim]Annulé.[/dim]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")


if __name__ == "__main__":
    main()
