"""Command-line argument parsing for ringwar.

This module defines the command-line interface for ringwar,
handling argument parsing and validation.
"""

import argparse
import os
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from ringwar import __version__
from ringwar.config import DEFAULT_CONFIG_FILE
from ringwar.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class for handling exclusion rules.

    This factory function creates an action class that will update the provided
    exclusion rules object as arguments are processed. This preserves the exact
    order of exclusion specifications as they appear on the command line, which
    matters for negated patterns.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        """Action to update exclusion rules as arguments are processed."""

        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                if isinstance(values, (str, os.PathLike)):
                    exclusion_rules.load_rules(values)
                else:
                    exclusion_rules.load_rules(Path(str(values)))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with ringwar's options.
    """
    description = """
    ringwar: package a web application as a WAR archive for servlet containers.

    The archive holds a generated WEB-INF/web.xml deployment descriptor, the
    compiled output, sources and resources under WEB-INF/classes/, and the
    static war-resources at its root. Editor lock and backup files are never
    included.
    """

    epilog = """
    Examples:
      # Build target/<name>-<version>.war from ringwar.yaml
      ringwar

      # Use another project file and archive name
      ringwar -c deploy/ringwar.yaml -n ROOT.war

      # Leave out files using gitignore-style patterns or pattern files
      ringwar -i "*.orig" -i "WEB-INF/classes/dev/" -e .warignore

      # Package existing compiled output without running compile-command
      ringwar --skip-compile

      # Show the generated deployment descriptor
      ringwar --web-xml
    """

    parser = argparse.ArgumentParser(
        prog="ringwar",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"ringwar {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        metavar="FILE",
        default=Path(DEFAULT_CONFIG_FILE),
        help=f"Project file (default: {DEFAULT_CONFIG_FILE}). Relative paths in it are resolved against its directory.",
    )
    parser.add_argument(
        "-n",
        "--war-name",
        metavar="NAME",
        help="Archive file name, overriding ring.war-name and the <name>-<version>.war default.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        help="File of gitignore-style patterns matched against archive paths (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern matched against archive paths. Can be specified multiple times; "
            "patterns are processed in the order they appear, mixed with -e/--exclude options."
        ),
    )
    parser.add_argument(
        "--web-xml",
        action="store_true",
        help="Print the generated deployment descriptor and exit without building.",
    )
    parser.add_argument(
        "--skip-compile",
        action="store_true",
        help="Do not run compile-command; package the compiled output as it is.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for progress, -vv for every entry).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.war_name is not None:
        if not args.war_name or "/" in args.war_name or "\\" in args.war_name:
            raise ValueError(f"--war-name must be a plain file name, got {args.war_name!r}")
    if args.web_xml and args.war_name is not None:
        raise ValueError("--war-name cannot be combined with --web-xml")
