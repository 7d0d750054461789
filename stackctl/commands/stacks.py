"""stackctl - Stack commands (list, file, env names, create, update)"""

from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.syntax import Syntax
from rich.table import Table

from stackctl.base import StackCommand
from stackctl.core.env_merger import repeated_env_names
from stackctl.logger import run_with_progress
from stackctl.utils import collect_env_overrides, read_stack_file


def config_option(func):
    return click.option(
        "--config",
        "config_file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Settings .env file (default: ./.env, then ~/.stackctl/.env)",
    )(func)


def output_options(func):
    func = click.option(
        "--json", "json_output", is_flag=True, help="Output in JSON format"
    )(func)
    return click.option(
        "--verbose", "-v", is_flag=True, help="Show all request details"
    )(func)


class StacksListCommand(StackCommand):
    """List regular stacks, or edge stacks when there are none."""

    def execute(self) -> None:
        service = self.ensure_stack_service("stacks")
        config = self.load_config()

        self.show_header(title="Stacks", server=config.base_url if config.server_url else None)

        stacks = run_with_progress(self.logger, "Fetching stacks", service.get_stacks)

        if self.json_output:
            self.output_json([stack.to_dict() for stack in stacks])
            return

        if not stacks:
            self.console.print("[yellow]No stacks found.[/yellow]\n")
            return

        table = Table(
            show_header=True,
            header_style="bold cyan",
            title_justify="left",
            padding=(0, 1),
        )
        table.add_column("ID", style="white", no_wrap=True)
        table.add_column("Name", style="green")
        table.add_column("Created", style="dim")
        table.add_column("Environment Groups", style="cyan")

        for stack in stacks:
            groups = ", ".join(str(g) for g in stack.environment_group_ids)
            table.add_row(str(stack.id), stack.name, stack.created_at, groups or "-")

        self.console.print()
        self.console.print(table)
        self.console.print(f"\n[dim]Total stacks: {len(stacks)}[/dim]\n")


class StackFileCommand(StackCommand):
    """Show a stack's compose file."""

    def __init__(self, stack_id: int, **kwargs):
        super().__init__(**kwargs)
        self.stack_id = stack_id

    def execute(self) -> None:
        service = self.ensure_stack_service("stacks-file")
        content = run_with_progress(
            self.logger,
            f"Fetching stack {self.stack_id} file",
            lambda: service.get_stack_file(self.stack_id),
        )

        if self.json_output:
            self.output_json({"id": self.stack_id, "file": content})
            return

        # Raw output keeps the file pipeable
        if not self.console.is_terminal:
            click.echo(content, nl=not content.endswith("\n"))
            return

        self.console.print()
        self.console.print(Syntax(content, "yaml", line_numbers=False))


class StackEnvCommand(StackCommand):
    """List the env variable names of a regular stack."""

    def __init__(self, stack_id: int, **kwargs):
        super().__init__(**kwargs)
        self.stack_id = stack_id

    def execute(self) -> None:
        service = self.ensure_stack_service("stacks-env")
        names = run_with_progress(
            self.logger,
            f"Fetching stack {self.stack_id} env",
            lambda: service.get_stack_env_names(self.stack_id),
        )

        if self.json_output:
            self.output_json(names)
            return

        self.show_header(title="Stack Env", details={"Stack": self.stack_id})

        if not names:
            self.console.print("[yellow]No env variables set.[/yellow]\n")
            return

        for name in names:
            self.console.print(f"  [cyan]{name}[/cyan]")
        self.console.print(f"\n[dim]Total: {len(names)}[/dim]\n")


class StackCreateCommand(StackCommand):
    """Create an edge stack."""

    def __init__(self, name: str, stack_file: Path, group_ids: List[int], **kwargs):
        super().__init__(**kwargs)
        self.name = name
        self.stack_file = stack_file
        self.group_ids = group_ids

    def execute(self) -> None:
        self.require_write_access()
        content = read_stack_file(self.stack_file)
        service = self.ensure_stack_service("stacks-create")

        self.show_header(
            title="Create Stack",
            details={"Name": self.name, "Groups": ", ".join(map(str, self.group_ids))},
        )

        if self.logger:
            self.logger.step(f"Creating edge stack {self.name}")

        stack_id = run_with_progress(
            self.logger,
            f"Creating stack {self.name}",
            lambda: service.create_stack(self.name, content, self.group_ids),
        )

        if self.json_output:
            self.output_json({"id": stack_id, "name": self.name})
            return

        if self.logger:
            self.logger.success(f"Stack created with ID: {stack_id}")
        self.print_success(f"Stack created successfully with ID: {stack_id}")


class StackUpdateCommand(StackCommand):
    """Update a stack's compose file, groups and env overrides."""

    def __init__(
        self,
        stack_id: int,
        stack_file: Path,
        group_ids: List[int],
        assignments: Tuple[str, ...] = (),
        env_file: Optional[Path] = None,
        env_json: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.stack_id = stack_id
        self.stack_file = stack_file
        self.group_ids = group_ids
        self.assignments = assignments
        self.env_file = env_file
        self.env_json = env_json

    def execute(self) -> None:
        self.require_write_access()
        content = read_stack_file(self.stack_file)
        overrides = collect_env_overrides(
            self.assignments, env_file=self.env_file, env_json=self.env_json
        )
        service = self.ensure_stack_service("stacks-update")

        self.show_header(
            title="Update Stack",
            details={"Stack": self.stack_id, "Env overrides": len(overrides)},
        )

        if self.logger:
            self.logger.step("[1/2] Checking input")
            self.logger.log(f"Stack file: {self.stack_file} ({len(content)} bytes)")
            for name in repeated_env_names(overrides):
                self.logger.warning(f"{name} is set more than once, using the last value")
            self.logger.step("[2/2] Updating stack")

        run_with_progress(
            self.logger,
            f"Updating stack {self.stack_id}",
            lambda: service.update_stack(
                self.stack_id, content, self.group_ids, overrides
            ),
        )

        if self.json_output:
            self.output_json({"id": self.stack_id, "updated": True})
            return

        if self.logger:
            self.logger.success(f"Stack {self.stack_id} updated")
        self.print_success("Stack updated successfully")


@click.command(name="stacks")
@config_option
@output_options
def stacks_list(config_file, verbose, json_output):
    """
    List stacks

    Shows regular stacks; falls back to edge stacks when the server has none.
    """
    cmd = StacksListCommand(
        config_file=config_file, verbose=verbose, json_output=json_output
    )
    cmd.run()


@click.command(name="stacks:file")
@click.argument("stack_id", type=int)
@config_option
@output_options
def stacks_file(stack_id, config_file, verbose, json_output):
    """Show a stack's compose file"""
    cmd = StackFileCommand(
        stack_id, config_file=config_file, verbose=verbose, json_output=json_output
    )
    cmd.run()


@click.command(name="stacks:env")
@click.argument("stack_id", type=int)
@config_option
@output_options
def stacks_env(stack_id, config_file, verbose, json_output):
    """
    List env variable names of a regular stack

    Values are never shown. Edge stacks have no env variables.
    """
    cmd = StackEnvCommand(
        stack_id, config_file=config_file, verbose=verbose, json_output=json_output
    )
    cmd.run()


@click.command(name="stacks:create")
@click.argument("name")
@click.option(
    "--file",
    "-f",
    "stack_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Compose file",
)
@click.option(
    "--group",
    "-g",
    "group_ids",
    multiple=True,
    required=True,
    type=int,
    help="Environment group ID (repeatable)",
)
@config_option
@output_options
def stacks_create(name, stack_file, group_ids, config_file, verbose, json_output):
    """
    Create a stack

    New stacks are created as edge stacks targeting the given groups.
    """
    cmd = StackCreateCommand(
        name,
        stack_file,
        list(group_ids),
        config_file=config_file,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()


@click.command(name="stacks:update")
@click.argument("stack_id", type=int)
@click.option(
    "--file",
    "-f",
    "stack_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Compose file",
)
@click.option(
    "--group",
    "-g",
    "group_ids",
    multiple=True,
    type=int,
    help="Environment group ID (repeatable, edge stacks)",
)
@click.option(
    "--env",
    "-e",
    "assignments",
    multiple=True,
    help="Env override KEY=VALUE (repeatable, regular stacks)",
)
@click.option(
    "--env-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Dotenv file with env overrides",
)
@click.option(
    "--env-json",
    help='Env overrides as JSON: [{"name": "K", "value": "V"}]',
)
@config_option
@output_options
def stacks_update(
    stack_id,
    stack_file,
    group_ids,
    assignments,
    env_file,
    env_json,
    config_file,
    verbose,
    json_output,
):
    """
    Update a stack

    \b
    Regular stacks: compose file is replaced, stored env is kept and
    overrides are merged in (existing names updated, new names appended).
    Edge stacks: compose file and groups are replaced; env overrides are
    rejected.
    """
    cmd = StackUpdateCommand(
        stack_id,
        stack_file,
        list(group_ids),
        assignments=assignments,
        env_file=env_file,
        env_json=env_json,
        config_file=config_file,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
