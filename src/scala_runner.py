"""scala-runner - run any Scala 2 release, branch head, nightly or PR build.

The invoked name selects the tool: ``scala``, ``scalac``, ``scaladoc`` or
``scalap``. Under the dispatcher name ``scala-runner`` it runs ``scala`` and
handles ``-h``/``-help`` itself.
"""

import logging
import os
import sys
from typing import List, Optional

from constants import Constants, ExitCodes, Runners
from common.errors import RunnerError
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from cli_config import load_runtime_config
from args import parse_args, usage
from launcher import run

logger = logging.getLogger(__name__)


def invoked_runner(program: str) -> str:
    """Identity the program was started as, defaulting to the dispatcher."""
    name = os.path.splitext(os.path.basename(program))[0].lower()
    if name in Constants.SUPPORTED_RUNNERS:
        return name
    return Runners.DISPATCHER.value


def main(argv: Optional[List[str]] = None) -> None:
    """Main function of the program."""
    argv = list(sys.argv if argv is None else argv)
    configure_logging()
    load_runtime_config()
    runner = invoked_runner(argv[0] if argv else "")

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main", runner=runner),
        )

    try:
        config = parse_args(argv[1:], runner)
        if config.show_help:
            sys.stdout.write(usage(runner))
            sys.exit(ExitCodes.SUCCESS.value)
        if config.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        exit_code = run(config)
    except RunnerError as exc:
        logger.error("%s", exc)
        sys.exit(exc.exit_code)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 130  # Standard SIGINT exit code

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
