"""
Multi-line structured logger for setup-bosun.
"""

import dataclasses
import inspect
import json
import logging
from datetime import datetime


@dataclasses.dataclass
class LogLine:
    """
    Represents a line in the setup-bosun log
    """

    time: str
    level: str
    caller_file: str
    caller_name: str
    caller_line: int
    message: str


class SetupBosunLogger:
    """
    Logger class
    """

    def __init__(self, name: str = "setup_bosun", level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

    def log(self, debug_message: str, level: int) -> None:
        """
        Log the debug message, tagged with the file, line and function of the caller
        """
        debug_message = debug_message.replace("'", '"').replace("\n", " ")

        curframe = inspect.currentframe()
        calframe = inspect.getouterframes(curframe, 2)
        caller_file = calframe[1][1].replace("\\", "/").split("/")[-1]
        caller_line = calframe[1][2]
        caller_name = calframe[1][3]

        debug_log_line = LogLine(
            time=str(datetime.now()),
            level=logging.getLevelName(level),
            caller_file=caller_file,
            caller_name=caller_name,
            caller_line=caller_line,
            message=debug_message,
        )

        self.logger.log(
            level=level,
            msg=json.dumps(dataclasses.asdict(debug_log_line)),
        )
