# src/frontcheck_cli/core/handlers/validate_handler.py
import argparse
import logging
import time
from typing import List, Optional

from tqdm.auto import tqdm

from frontcheck.controllers.report_controller import ReportController
from frontcheck.controllers.validate_controller import ValidateController
from frontcheck.errors import ProjectLoadError
from frontcheck.registry import RuleRegistry, default_registry
from frontcheck.settings import CheckerSettings
from frontcheck_cli.core.managers.config_manager import ConfigManager, config_manager
from frontcheck_cli.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontcheck validate",
        description="Validate a static HTML/SCSS project and report every rule violation.",
    )
    parser.add_argument("path", nargs="?", default=None,
                        help="Project directory (default: WORKING_DIR or the current directory).")
    parser.add_argument("--rules", type=str, default=None,
                        help="Comma separated rule names to run (see 'frontcheck rules').")
    parser.add_argument("--no-w3c", action="store_true", help="Skip the online W3C markup check.")
    parser.add_argument("--stylelint", action="store_true", help="Also run stylelint through npx.")
    parser.add_argument("--workers", type=int, default=None, help="Run rules on N threads.")
    parser.add_argument("--export", type=str, default=None, help="Write findings to a .csv or .xlsx file.")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print the summary line.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging.")
    parser.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                        help="Override a setting for this run, e.g. rules.max_nesting_depth=3.")
    return parser


def _parse_rule_names(raw: Optional[str]) -> Optional[List[str]]:
    if not raw:
        return None
    names = [name.strip() for name in raw.split(',') if name.strip()]
    return names or None


def handle_validate(args: List[str], config: Optional[ConfigManager] = None) -> int:
    """
    Handler for 'frontcheck validate'.

    Returns:
        0 when no finding exists, 1 when findings exist or the project cannot
        be loaded, 2 on usage errors.
    """
    config = config or config_manager
    parser = _build_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return EXIT_OK if not e.code else EXIT_USAGE

    if parsed_args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if parsed_args.workers is not None and parsed_args.workers < 1:
        print("❌ --workers must be at least 1")
        return EXIT_USAGE

    for assignment in parsed_args.set:
        key, sep, value = assignment.partition("=")
        if not sep or not key.strip() or not config.set_nested(key.strip(), value.strip()):
            print(f"❌ --set expects KEY=VALUE with a settings key, got '{assignment}'")
            return EXIT_USAGE

    try:
        settings = CheckerSettings.from_config(
            config.get_all(),
            working_dir=parsed_args.path,
            w3c_enabled=False if parsed_args.no_w3c else None,
            stylelint_enabled=True if parsed_args.stylelint else None,
        )
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}")
        return EXIT_USAGE

    workers = parsed_args.workers or config.get_nested("runner.workers", 1)
    controller = ValidateController(settings, workers=workers)

    try:
        rules = controller.select_rules(_parse_rule_names(parsed_args.rules))
    except KeyError as e:
        print(f"❌ {e.args[0]}")
        return EXIT_USAGE

    if not parsed_args.quiet:
        print(f"🚀 Validating {settings.working_dir} with {len(rules)} rules...")

    pbar = tqdm(total=len(rules), desc="Validating", unit="rule", disable=parsed_args.quiet, leave=False)

    def progress_update(current, total, name):
        pbar.set_postfix_str(name)
        pbar.n = current
        pbar.refresh()

    start = time.perf_counter()
    try:
        report = controller.run(rules.names(), progress_callback=progress_update)
    except ProjectLoadError as e:
        print(f"❌ {e}")
        return EXIT_FINDINGS
    finally:
        pbar.close()
    duration = time.perf_counter() - start
    logger.info("Validation finished in %.2fs", duration)

    reporter = ReportController(report)
    print(reporter.render_summary().strip() if parsed_args.quiet else reporter.render_text())

    if parsed_args.export:
        try:
            out_path = reporter.export(str(PathUtils.resolve_output_path(parsed_args.export)))
            print(f"✅ Report exported to: {out_path}")
        except ValueError as e:
            print(f"❌ {e}")
            return EXIT_USAGE
        except OSError as e:
            print(f"❌ Error exporting: {e}")

    return EXIT_OK if report.passed else EXIT_FINDINGS


def handle_rules(args: List[str], registry: Optional[RuleRegistry] = None) -> int:
    """Handler for 'frontcheck rules': lists the default rule set in run order."""
    parser = argparse.ArgumentParser(prog="frontcheck rules", description="List the available rules.")
    parser.add_argument("--codes", action="store_true", help="Also list the issue codes of every rule.")
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return EXIT_OK if not e.code else EXIT_USAGE

    registry = registry if registry is not None else default_registry()
    print(f"{'RULE':<20} | {'CATEGORY':<14} | DESCRIPTION")
    print("-" * 70)
    for rule in registry:
        print(f"{rule.name:<20} | {rule.category:<14} | {rule.description}")
        if parsed_args.codes:
            for code in rule.codes:
                print(f"{'':<20} |   {code}")
    if parsed_args.codes:
        print(f"\n{len(registry)} rules, {len(registry.all_codes())} distinct issue codes")
    return EXIT_OK
