"""
New command - Create a GenLayer project from the bundled template.
"""

import shutil
from pathlib import Path
from typing import Optional

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.result import fail, ok

TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "templates" / "default"


class NewAction(BaseAction):
    def __init__(self, *args, template_path: Optional[Path] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.template_path = template_path or TEMPLATE_PATH

    def create_project(
        self, project_name: str, path: str = ".", overwrite: bool = False
    ) -> dict:
        target_path = (Path(path) / project_name).resolve()

        if target_path.exists() and not overwrite:
            message = (
                f'Project directory "{target_path}" already exists. '
                "Use --overwrite to replace it."
            )
            self.reporter.fail_spinner(message)
            return fail(message)

        self.reporter.start_spinner(f"Creating new GenLayer project: {project_name}")
        try:
            shutil.copytree(
                self.template_path,
                target_path,
                dirs_exist_ok=True,
                ignore=shutil.ignore_patterns("__pycache__", "*.pyc"),
            )
        except OSError as e:
            self.reporter.fail_spinner(f'Error creating project "{project_name}"', e)
            return fail(f'Error creating project "{project_name}"', error=e)

        self.reporter.succeed_spinner(
            f'Project "{project_name}" created successfully at {target_path}'
        )
        return ok(str(target_path))


@click.command(name="new")
@click.argument("project_name")
@click.option(
    "--path",
    default=".",
    show_default=True,
    help="Directory in which to create the project.",
)
@click.option(
    "--overwrite",
    is_flag=True,
    default=False,
    help="Overwrite the directory if it exists.",
)
def new(project_name: str, path: str, overwrite: bool):
    """Create a new GenLayer project using the default template."""
    return NewAction().create_project(project_name, path, overwrite)
