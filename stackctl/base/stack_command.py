"""
Stack Command Base Class

Base class for commands that talk to the orchestration server.
Provides automatic config loading and service initialization.
"""

from pathlib import Path
from typing import Optional
from .base_command import BaseCommand
from stackctl.models.config import ServerConfig
from stackctl.services import (
    ConfigService,
    EdgeStackClient,
    StackService,
    StackTransport,
)


class StackCommand(BaseCommand):
    """
    Base class for stack commands.

    Provides:
    - Config loading (.env + environment)
    - Logger bound to the configured log directory
    - Pre-configured StackService
    """

    def __init__(
        self,
        config_file: Optional[Path] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(verbose=verbose, json_output=json_output)
        self.config_service = ConfigService(env_file=config_file)
        self.config: Optional[ServerConfig] = None
        self.stack_service: Optional[StackService] = None

    def load_config(self) -> ServerConfig:
        """
        Load server configuration once.

        Returns:
            ServerConfig instance
        """
        if self.config is None:
            self.config = self.config_service.load()
        return self.config

    def ensure_stack_service(self, command_name: str) -> StackService:
        """
        Ensure StackService is initialized.

        Args:
            command_name: Command name used for the log file

        Returns:
            StackService instance
        """
        if self.stack_service is None:
            config = self.load_config()
            if self.logger is None:
                self.init_logger(command_name, config.log_dir)
            transport = StackTransport(config)
            self.stack_service = StackService(
                config,
                EdgeStackClient(transport),
                transport=transport,
                logger=self.logger,
            )
        return self.stack_service

    def require_write_access(self) -> None:
        """
        Refuse write commands in read-only mode.

        Raises:
            SystemExit: If read-only mode is on
        """
        if self.load_config().read_only:
            self.exit_with_error(
                "Read-only mode is enabled (STACKCTL_READ_ONLY); write commands are disabled"
            )
