"""Provider CLI deletion commands.

Maps deletion step types to the provider CLI invocation that removes the
resource (vercel, turso, supabase).
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable, Dict, List, Optional

from fluorite_flake.models.cleanup_plan import DeletionStep
from fluorite_flake.models.dependency_graph import ResourceType

logger = logging.getLogger(__name__)


class StepParameterError(Exception):
    """Raised when a deletion step lacks a required parameter."""


class ProviderCommandError(Exception):
    """Raised when a provider CLI exits with an error.

    Attributes:
        command: Executable that failed
        returncode: Process exit code
        stderr: Captured error output
    """

    def __init__(self, command: str, returncode: int, stderr: str) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit code {returncode}"
        super().__init__(f"{command} failed: {detail}")


class UnsupportedStepError(Exception):
    """Raised when no deletion command exists for a step type."""


class ProviderCommandRunner:
    """Executes provider CLI deletion commands.

    Attributes:
        run: subprocess.run compatible callable
    """

    # Deletion command mapping: resource_type -> (command prefix, required parameter)
    DELETION_COMMANDS: Dict[ResourceType, tuple] = {
        ResourceType.VERCEL_PROJECT: (["vercel", "project", "rm"], "projectId"),
        ResourceType.TURSO_DATABASE: (["turso", "db", "destroy"], "databaseName"),
        ResourceType.SUPABASE_PROJECT: (["supabase", "projects", "delete"], "projectRef"),
        ResourceType.BLOB_STORE: (["vercel", "blob", "rm"], "storeId"),
    }

    def __init__(self, run: Optional[Callable[..., subprocess.CompletedProcess]] = None) -> None:
        self.run = run or subprocess.run

    def build_command(self, step: DeletionStep) -> List[str]:
        """Build the CLI arguments for a deletion step.

        Args:
            step: Deletion step

        Returns:
            Argument list starting with the executable

        Raises:
            UnsupportedStepError: If the step type has no deletion command
            StepParameterError: If the required identifier parameter is missing
        """
        if step.type not in self.DELETION_COMMANDS:
            raise UnsupportedStepError(f"Unsupported step type: {step.type.value}")

        prefix, id_param = self.DELETION_COMMANDS[step.type]
        resource_id = step.parameters.get(id_param)
        if not resource_id:
            raise StepParameterError(f"Step {step.id} is missing required parameter '{id_param}'")

        args = [*prefix, str(resource_id), "--yes"]

        if step.type == ResourceType.SUPABASE_PROJECT:
            args.append("--non-interactive")

        if step.type == ResourceType.BLOB_STORE and step.parameters.get("token"):
            args.extend(["--token", str(step.parameters["token"])])

        return args

    def delete(self, step: DeletionStep) -> None:
        """Delete the resource behind a step.

        Args:
            step: Deletion step

        Raises:
            UnsupportedStepError: If the step type has no deletion command
            StepParameterError: If the required identifier parameter is missing
            ProviderCommandError: If the provider CLI fails or cannot be started
        """
        args = self.build_command(step)
        logger.debug(f"Running {' '.join(args[:3])} for step {step.id}")

        try:
            completed = self.run(args, capture_output=True, text=True, check=False)
        except FileNotFoundError:
            raise ProviderCommandError(args[0], 127, f"'{args[0]}' command not found")
        except OSError as e:
            raise ProviderCommandError(args[0], 126, f"could not run '{args[0]}': {e}")

        if completed.returncode != 0:
            raise ProviderCommandError(args[0], completed.returncode, completed.stderr or "")

        logger.info(f"Deleted {step.type.value}: {step.id}")
