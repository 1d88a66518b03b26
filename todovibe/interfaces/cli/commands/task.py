"""Task management CLI commands.

Commands for the task lifecycle: adding, listing, completing, renaming,
scheduling and deleting tasks. Each command loads the store, applies
one application-service action and saves the returned collection.
"""

from typing import Optional

import typer

from todovibe.application import (
    add_task,
    delete_task,
    get_task_stats,
    rename_task,
    schedule_task,
    toggle_task,
)
from todovibe.config import get_config
from todovibe.domain.shared import Err
from todovibe.domain.task import (
    TaskCompleted,
    TaskView,
    ancestor_titles,
    build_tree,
    effective_due_date,
    find_task,
    flatten,
    inherited_due_date,
    live_index,
    resolve_parents,
    view_nodes,
)
from todovibe.domain.task.mutators import utc_now
from todovibe.interfaces.cli.common import (
    EMPTY_VIEW_MESSAGES,
    StoreOption,
    format_due,
    format_task_line,
    get_repository,
    parse_date_option,
    print_error,
    print_info,
    print_separator,
    print_success,
    resolve_task_id,
)

app = typer.Typer(help="Task management commands")


# =============================================================================
# Commands
# =============================================================================


@app.command("add")
def add(
    title: str = typer.Argument(..., help="Task title; #words become tags"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
    parent: Optional[str] = typer.Option(
        None, "--parent", "-p", help="Parent task id or id prefix"
    ),
    store: StoreOption = None,
) -> None:
    """Add a task or subtask."""
    repo = get_repository(store)
    tasks = repo.load()
    due_at = parse_date_option(due)
    parent_id = resolve_task_id(tasks, parent) if parent else None

    result = add_task(tasks, title, due_at=due_at, parent_id=parent_id)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    tasks, event = result.value
    repo.save(tasks)
    print_success(f"Added {event.task_id[:8]}: {event.title}")


@app.command("list")
def list_tasks(
    view: TaskView = typer.Option(
        TaskView.INBOX, "--view", help="View to show", case_sensitive=False
    ),
    search: str = typer.Option("", "--search", "-q", help="Filter by title or tag"),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every live task"),
    store: StoreOption = None,
) -> None:
    """List tasks in a view."""
    tasks = get_repository(store).load()
    now = utc_now()
    live = live_index(tasks)
    parents = resolve_parents(live)

    if show_all:
        nodes = flatten(build_tree(tasks))
    else:
        upcoming_days = get_config().upcoming_days
        nodes = view_nodes(tasks, view, now, search, upcoming_days=upcoming_days)

    if not nodes:
        print_info(EMPTY_VIEW_MESSAGES[view])
        return

    for node in nodes:
        due = inherited_due_date(node.task, live, parents)
        typer.echo(format_task_line(node.task, node.depth, due))


@app.command("done")
def done(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    store: StoreOption = None,
) -> None:
    """Toggle a task's completion."""
    repo = get_repository(store)
    tasks = repo.load()
    task_id = resolve_task_id(tasks, task_ref)

    result = toggle_task(tasks, task_id)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    tasks, event = result.value
    repo.save(tasks)
    live = live_index(tasks)
    title = live[task_id].title
    if not isinstance(event, TaskCompleted):
        print_info(f"Reopened: {title}")
        return

    print_success(f"Completed: {title}")
    for ancestor_id in event.cascaded_ids:
        print_success(f"  also completed: {live[ancestor_id].title}")


@app.command("rename")
def rename(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    title: str = typer.Argument(..., help="New title; #words become tags"),
    store: StoreOption = None,
) -> None:
    """Rename a task."""
    repo = get_repository(store)
    tasks = repo.load()
    task_id = resolve_task_id(tasks, task_ref)

    result = rename_task(tasks, task_id, title)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    tasks, event = result.value
    if event is None:
        print_info("Title left unchanged.")
        return
    repo.save(tasks)
    print_success(f"Renamed to: {event.title}")


@app.command("due")
def due(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    date: Optional[str] = typer.Argument(None, help="Due date (YYYY-MM-DD)"),
    clear: bool = typer.Option(False, "--clear", help="Remove the due date"),
    store: StoreOption = None,
) -> None:
    """Set or clear a task's due date."""
    if clear == (date is not None):
        print_error("Give either a date or --clear.")
        raise typer.Exit(1)

    repo = get_repository(store)
    tasks = repo.load()
    task_id = resolve_task_id(tasks, task_ref)

    result = schedule_task(tasks, task_id, parse_date_option(date))
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    tasks, event = result.value
    repo.save(tasks)
    if event.due_at is None:
        print_success("Due date cleared.")
    else:
        print_success(f"Due {format_due(event.due_at)}")


@app.command("delete")
def delete(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    store: StoreOption = None,
) -> None:
    """Delete a task and all of its subtasks."""
    repo = get_repository(store)
    tasks = repo.load()
    task_id = resolve_task_id(tasks, task_ref)
    title = live_index(tasks)[task_id].title

    result = delete_task(tasks, task_id)
    if isinstance(result, Err):
        print_error(result.error)
        raise typer.Exit(1)

    tasks, event = result.value
    repo.save(tasks)
    subtasks = len(event.task_ids) - 1
    suffix = f" and {subtasks} subtask(s)" if subtasks else ""
    print_success(f"Deleted: {title}{suffix}")


@app.command("show")
def show(
    task_ref: str = typer.Argument(..., help="Task id or id prefix"),
    store: StoreOption = None,
) -> None:
    """Show one task with its breadcrumb and subtasks."""
    tasks = get_repository(store).load()
    task_id = resolve_task_id(tasks, task_ref)
    task = find_task(task_id, tasks)
    if task is None:
        print_error(f"Task not found: {task_ref}")
        raise typer.Exit(1)

    breadcrumb = list(reversed(ancestor_titles(task_id, tasks)))
    print_separator()
    if breadcrumb:
        typer.echo(" > ".join(breadcrumb))
    typer.echo(f"{task.title}  [{'done' if task.completed else 'open'}]")
    print_separator()
    typer.echo(f"id:       {task.id}")
    if task.tags:
        typer.echo(f"tags:     {', '.join(task.tags)}")
    due_at = effective_due_date(task, tasks)
    if due_at is not None:
        source = "" if task.due_at is not None else " (inherited)"
        typer.echo(f"due:      {format_due(due_at)}{source}")

    placed = next((n for n in flatten(build_tree(tasks)) if n.task.id == task_id), None)
    if placed is not None and placed.children:
        typer.echo("subtasks:")
        for node in flatten(placed.children):
            typer.echo(format_task_line(node.task, node.depth - placed.depth))


@app.command("stats")
def stats(store: StoreOption = None) -> None:
    """Show task counts per view."""
    tasks = get_repository(store).load()
    summary = get_task_stats(tasks, upcoming_days=get_config().upcoming_days)
    typer.echo(f"Tasks:     {summary.total} ({summary.progress_percent}% done)")
    typer.echo(f"Active:    {summary.active}")
    typer.echo(f"Completed: {summary.completed}")
    typer.echo(f"Inbox:     {summary.inbox}")
    typer.echo(f"Today:     {summary.today}")
    typer.echo(f"Upcoming:  {summary.upcoming}")
