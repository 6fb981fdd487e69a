"""Command-line interface for ringwar.

This module provides the command-line entry point: it parses arguments,
loads the project file, and builds the archive, or prints the deployment
descriptor with --web-xml.

Exit Codes:
    0: Successful completion
    1: Build or configuration error
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)

Example:
    # Build the archive described by ./ringwar.yaml
    $ ringwar
    Created target/myapp-0.1.0.war
"""

import logging
import sys

from ringwar.cli.argparser import create_parser, validate_args
from ringwar.compiler import PrecompiledOutput
from ringwar.config import load_config
from ringwar.descriptor import make_web_xml
from ringwar.exceptions import WarBuildError
from ringwar.exclusion_rules.git_rules import GitIgnoreExclusionRules
from ringwar.war import war

LOG_FORMAT = "%(levelname)s: %(message)s"


def log_level(verbosity: int) -> int:
    """Map the number of -v flags to a logging level.

    Example:
        >>> log_level(0) == logging.WARNING, log_level(1) == logging.INFO, log_level(5) == logging.DEBUG
        (True, True, True)
    """
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def main() -> None:
    """Main entry point for the ringwar command-line interface.

    Exit codes:
        0: Successful completion
        1: Build or configuration error
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
    """
    try:
        # Populated by -i/-e while parsing
        exclusion_rules = GitIgnoreExclusionRules()

        parser = create_parser(exclusion_rules)
        args = parser.parse_args()
        validate_args(args)

        logging.basicConfig(level=log_level(args.verbose), format=LOG_FORMAT)

        config = load_config(args.config)

        if args.web_xml:
            print(make_web_xml(config, indent=2), end="")
            return

        compiler = PrecompiledOutput() if args.skip_compile else None
        war_path = war(config, args.war_name, compiler=compiler, extra_rules=exclusion_rules)
        print(f"Created {war_path}")

    except KeyboardInterrupt:
        sys.exit(130)
    except WarBuildError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        if e.__cause__ is not None:
            print(f"Caused by: {str(e.__cause__)}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
