"""Command line entry point: replay an interaction script and print the result."""

import argparse
import logging
from typing import Optional, Sequence

from geoconstruct import (
    ConstructionSession,
    ElementStore,
    get_tolerance_config,
    parse_script,
    print_elements,
    run_script,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Replay a geometry construction script")
    parser.add_argument("path", help="Path to the interaction script")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--zoom",
        type=float,
        default=1.0,
        help="Initial zoom used to scale pick radii (default: 1.0)",
    )
    parser.add_argument(
        "--pick-radius",
        type=float,
        help="Pick/snap radius in screen pixels (default: from tolerance config)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path) as fin:
        text = fin.read()

    logger.info("Parsing script from %s", args.path)
    commands = parse_script(text)
    logger.info("Parsed %d command(s)", len(commands))

    config = get_tolerance_config()
    if args.pick_radius is not None:
        config.pick_radius_px = args.pick_radius

    store = ElementStore(config=config)
    session = ConstructionSession(store)
    session.set_zoom(args.zoom)
    run_script(commands, session)

    print(print_elements(store.elements), end="")
    print(f"# elements={len(store.elements)} can_undo={store.can_undo} can_redo={store.can_redo}")


if __name__ == "__main__":
    main()
