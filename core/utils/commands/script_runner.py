import importlib
import inspect
import logging
from pathlib import Path

from core.utils.commands.command import Command

logger = logging.getLogger(__name__)


class ScriptRunner:
    """Finds the ``Command`` subclass in ``<commands_folder>/<name>.py`` and runs it."""

    def __init__(self, commands_folder: str = "scripts"):
        self.commands_folder = commands_folder

    def available_commands(self) -> list[str]:
        return sorted(
            path.stem
            for path in Path(self.commands_folder).glob("*.py")
            if not path.stem.startswith("_")
        )

    def load_command(self, command_name: str) -> Command:
        module_path = f"{self.commands_folder.replace('/', '.')}.{command_name}"
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            if e.name != module_path:
                raise
            raise LookupError(
                f"Unknown command '{command_name}'. "
                f"Available: {', '.join(self.available_commands()) or 'none'}"
            )

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if issubclass(obj, Command) and obj is not Command and obj.__module__ == module.__name__:
                return obj(command_name)
        raise LookupError(f"No Command subclass found in {module_path}")

    def run(self, command_name: str, argv: list[str]):
        command = self.load_command(command_name)
        logger.info(f"Running command {command_name}")
        return command.run_from_argv(argv)
