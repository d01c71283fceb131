"""
Command-line interface for redtask.

Usage:
    redtask new "Write report" --priority high --due 01/02/2026 --tags work,q1
    redtask list [--all]
    redtask complete 3
    redtask delete 3
    redtask projects new "Rust task" --shortcode rt --description "CLI rewrite"
    redtask projects list
"""

import argparse
import sys
from typing import Sequence

from pydantic import ValidationError

from redtask.database import redis_client
from redtask.display import color, print_projects, print_tasks
from redtask.exceptions import NotFound, RedtaskException, StoreUnavailable
from redtask.logging_config import Colors, get_logger, setup_logging
from redtask.models import Priority
from redtask.schemas import ProjectCreate, TaskCreate
from redtask.services import projects as project_service
from redtask.services import tasks as task_service
from redtask.services.store import EntityStore

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_STORE_UNAVAILABLE = 2

CREATED_MESSAGES = {
    Priority.NOW: "Urgent task created! Do it now!",
    Priority.HIGH: "High priority task created!",
    Priority.LOW: "Task created!",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="redtask", description="Personal task tracker backed by Redis")
    parser.add_argument("--redis-url", default=None, help="Override the configured Redis URL")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    new = sub.add_parser("new", help="Create a new task")
    new.add_argument("text", help="What needs doing")
    new.add_argument("-p", "--priority", help="now|high|low (default: low)")
    new.add_argument("-d", "--due", help="Due date as DD/MM/YYYY")
    new.add_argument("-t", "--tags", help="Comma-separated tags")
    new.add_argument("--project", help="Shortcode of the project the task belongs to")

    lst = sub.add_parser("list", help="List open tasks")
    lst.add_argument("-a", "--all", action="store_true", help="Include completed tasks")

    complete = sub.add_parser("complete", help="Mark a task done")
    complete.add_argument("id", type=int)

    delete = sub.add_parser("delete", help="Delete a task")
    delete.add_argument("id", type=int)

    projects = sub.add_parser("projects", help="Manage projects")
    projects_sub = projects.add_subparsers(dest="projects_command", required=True)
    pnew = projects_sub.add_parser("new", help="Create a project")
    pnew.add_argument("name")
    pnew.add_argument("-s", "--shortcode", required=True)
    pnew.add_argument("-d", "--description")
    projects_sub.add_parser("list", help="List projects")

    return parser


def run(args: argparse.Namespace, store: EntityStore) -> None:
    """Dispatch one parsed command against ``store``."""
    if args.command == "new":
        task = task_service.create_task(
            store,
            TaskCreate(
                text=args.text,
                priority=args.priority,
                due=args.due,
                tags=args.tags,
                project=args.project,
            ),
        )
        print(color(CREATED_MESSAGES[task.priority], Colors.BLUE))
        print_tasks([task])
    elif args.command == "list":
        print_tasks(task_service.list_tasks(store, include_done=args.all))
    elif args.command == "complete":
        task = task_service.complete_task(store, args.id)
        print(color("Task completed! Well done!", Colors.GREEN))
        print_tasks([task])
    elif args.command == "delete":
        task = task_service.delete_task(store, args.id)
        print(color("Task deleted!", Colors.RED))
        print_tasks([task])
    elif args.command == "projects":
        if args.projects_command == "new":
            project_in = ProjectCreate(
                name=args.name, shortcode=args.shortcode, description=args.description
            )
            project = project_service.create_project(
                store, project_in.name, project_in.shortcode, project_in.description
            )
            print(color("Project created!", Colors.BLUE))
            print_projects([project])
        else:
            print_projects(project_service.list_projects(store))


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.verbose else "WARNING")

    try:
        with redis_client(args.redis_url) as client:
            run(args, EntityStore(client))
    except NotFound as exc:
        print(color(f"{exc.resource} not found: {exc.resource_id}", Colors.RED))
        return EXIT_OK
    except StoreUnavailable as exc:
        logger.debug("Command failed", exc_info=True)
        print(color(exc.message, Colors.BOLD_RED), file=sys.stderr)
        return EXIT_STORE_UNAVAILABLE
    except RedtaskException as exc:
        logger.debug("Command failed", exc_info=True)
        print(color(exc.message, Colors.BOLD_RED), file=sys.stderr)
        return EXIT_ERROR
    except ValidationError as exc:
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"])
            print(color(f"Invalid {field}: {error['msg']}", Colors.BOLD_RED), file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
