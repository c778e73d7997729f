"""
Glue between setup-bosun and the CI runner executing it.

Inputs are read from INPUT_* variables; outputs go through the runner's
file commands (GITHUB_PATH, GITHUB_ENV). Annotations are workflow commands
on stdout.
"""

import os
import sys
import uuid
from typing import List, MutableMapping, Optional, TextIO

from setup_bosun.setup_bosun_exceptions import SetupBosunException


class CIEnvironment:
    """
    Reads inputs from and writes results back to the CI runner.
    """

    def __init__(
        self,
        environ: Optional[MutableMapping[str, str]] = None,
        stream: Optional[TextIO] = None,
    ):
        self.environ = os.environ if environ is None else environ
        self.stream = stream if stream is not None else sys.stdout

    def get_input(self, name: str) -> str:
        """
        Gets the value of an input, or an empty string when it is not set.
        """
        return self.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()

    def get_boolean_input(self, name: str) -> bool:
        return self.get_input(name).lower() in ("true", "1", "yes")

    def add_path(self, directory: str) -> None:
        """
        Prepends a directory to PATH for this process and for later steps of the job.
        """
        path_file = self.environ.get("GITHUB_PATH")
        if path_file:
            self._append_to_file(path_file, directory)
        else:
            self.warning(
                f"GITHUB_PATH is not set, {directory} is only on PATH for this process"
            )

        current = self.environ.get("PATH", "")
        self.environ["PATH"] = (
            f"{directory}{os.pathsep}{current}" if current else directory
        )

    def export_variable(self, name: str, value: str) -> None:
        """
        Sets an environment variable for this process and for later steps of the job.
        """
        self.environ[name] = value

        env_file = self.environ.get("GITHUB_ENV")
        if env_file:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            if delimiter in name or delimiter in value:
                raise SetupBosunException(
                    f"Unexpected input: name or value contains the delimiter {delimiter}"
                )
            self._append_to_file(env_file, f"{name}<<{delimiter}\n{value}\n{delimiter}")
        else:
            self.warning(f"GITHUB_ENV is not set, {name} is only set for this process")

    def debug(self, message: str) -> None:
        self._issue_command("debug", message)

    def warning(self, message: str) -> None:
        self._issue_command("warning", message)

    def error(self, message: str) -> None:
        self._issue_command("error", message)

    def set_failed(self, message: str) -> int:
        """
        Reports the job step as failed. Returns the exit code the process should use.
        """
        self.error(message)
        return 1

    @staticmethod
    def list_files(root: str) -> List[str]:
        """
        Lists every file under root, relative to root, in sorted order.
        """
        found = []
        for dirpath, _, filenames in os.walk(root):
            for filename in filenames:
                found.append(os.path.relpath(os.path.join(dirpath, filename), root))
        return sorted(found)

    def _issue_command(self, command: str, message: str) -> None:
        self.stream.write(f"::{command}::{_escape_data(message)}\n")
        self.stream.flush()

    @staticmethod
    def _append_to_file(path: str, text: str) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(f"{text}\n")


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
