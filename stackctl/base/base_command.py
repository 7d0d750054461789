"""
Base Command Class

Abstract base for all stackctl CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Any, Dict
import json
from rich.console import Console
from stackctl.exceptions import StackCtlError
from stackctl.ui_components import show_header
from stackctl.logger import StackLogger


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling
    - JSON output support
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.logger: Optional[StackLogger] = None

    def init_logger(self, command_name: str, log_dir: Path) -> Optional[StackLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            command_name: Command name
            log_dir: Root logs directory

        Returns:
            StackLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = StackLogger(command_name, log_dir, verbose=self.verbose)
        return self.logger

    def output_json(self, data: Any, exit_code: int = 0) -> None:
        """
        Output data as JSON and exit.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        """
        Output error as JSON and exit.

        Args:
            error: Error message
            details: Optional error details
            exit_code: Exit code
        """
        error_data: Dict[str, Any] = {"error": error}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        server: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                server=server,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {message}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {message}[/red]")

    def exit_with_error(self, message: str, code: int = 1) -> None:
        """
        Print error and exit.

        Args:
            message: Error message
            code: Exit code
        """
        if self.json_output:
            self.output_json_error(message, exit_code=code)
        self.print_error(message)
        raise SystemExit(code)

    def _close_logger(self) -> None:
        if self.logger:
            self.logger.close()

    def _report_failure(self, title: str, error: Exception, context: Optional[str]) -> None:
        if self.json_output:
            details = {"type": type(error).__name__}
            if context:
                details["context"] = context
            self.output_json_error(str(getattr(error, "message", error)), details)

        self.console.print(f"\n[bold red]✗ {title}:[/bold red] {getattr(error, 'message', error)}\n")
        if context:
            self.console.print(f"  [color(208)]{context}[/color(208)]\n")
        if self.logger:
            self.logger.log_error(f"{title}: {getattr(error, 'message', error)}", context=context)
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")
        raise SystemExit(1)

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            if self.logger:
                self.console.print(
                    f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n"
                )
            raise SystemExit(130)
        except SystemExit:
            raise
        except StackCtlError as e:
            self._report_failure(type(e).__name__, e, e.context)
        except Exception as e:
            self._report_failure(type(e).__name__, e, None)
        finally:
            self._close_logger()
