import logging
import sys
from typing import Callable, Dict, List, Optional

from frontcheck_cli.core.handlers.validate_handler import EXIT_USAGE, handle_rules, handle_validate
from frontcheck_cli.core.managers.config_manager import config_manager
from frontcheck_cli.core.utils.configure_logging import configure_logger

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "validate": handle_validate,
    "rules": handle_rules,
}

USAGE = """usage: frontcheck <command> [options]

commands:
  validate [PATH]   Validate a project (exit 0 = clean, 1 = findings)
  rules             List the available rules

Run 'frontcheck <command> --help' for the options of a command."""


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the `frontcheck` command."""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logger(config_manager.get_nested("debug.level", "WARNING"))

    if not args or args[0] in ("-h", "--help"):
        print(USAGE)
        return 0 if args else EXIT_USAGE

    command, rest = args[0], args[1:]
    handler = COMMANDS.get(command)
    if handler is None:
        print(f"❌ Unknown command '{command}'\n\n{USAGE}")
        return EXIT_USAGE

    logger.debug("Dispatching %s %s", command, rest)
    return handler(rest)


if __name__ == "__main__":
    sys.exit(main())
