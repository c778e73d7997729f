"""
Entry point of the setup-bosun CI step.

Installs the latest bosun release, puts it on PATH and exports BOSUN_CONFIG
so later steps of the job can find the bundled configuration.
"""

import logging
import sys
from typing import Optional

from setup_bosun.ci_environment import CIEnvironment
from setup_bosun.setup_bosun_config import InstallerConfig
from setup_bosun.setup_bosun_exceptions import SetupBosunException
from setup_bosun.setup_bosun_logger import SetupBosunLogger
from setup_bosun.tool_installer import ToolInstaller

LIST_FILES_INPUT = "list-files"


def run(
    config: InstallerConfig,
    logger: SetupBosunLogger,
    environment: CIEnvironment,
    installer: Optional[ToolInstaller] = None,
) -> int:
    """
    Run the CI step. Returns the process exit code.
    """
    installer = installer or ToolInstaller(config, logger, environment)
    try:
        logger.log(f"Running installer in {config.action_directory}", logging.INFO)

        bosun_path = installer.download_latest()
        logger.log(f"Downloaded {config.tool_name}: {bosun_path}", logging.INFO)

        environment.export_variable(config.config_variable_name, config.config_file_path)

        if environment.get_boolean_input(LIST_FILES_INPUT):
            for relative_path in environment.list_files(config.action_directory):
                logger.log(relative_path, logging.INFO)
    except (SetupBosunException, OSError) as e:
        logger.log(f"setup-bosun failed: {e}", logging.ERROR)
        return environment.set_failed(str(e))

    return 0


def main() -> int:
    logging.basicConfig(stream=sys.stderr, format="%(message)s")
    environment = CIEnvironment()
    config = InstallerConfig.from_environment(environment.environ)
    return run(config, SetupBosunLogger(), environment)
