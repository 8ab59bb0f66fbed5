#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Exe Icon Extractor
Main entry point for the application
"""

import sys
import logging
import argparse
from icon_extractor.utils.logging_utils import setup_logging
from icon_extractor.config.config_manager import load_config, OUTPUT_FORMATS
from icon_extractor.controllers.dependency_controller import check_and_install_dependencies

VERSION = "1.0.0"
APP_NAME = "Exe Icon Extractor"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="exe-icon-extractor",
        description="Extract the icon of a Windows executable into icon.<format> next to it"
    )
    parser.add_argument("paths", nargs="*",
                        help="Executables or directories holding one (opens a file picker if omitted)")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, type=str.lower,
                        help="Output image format (default from config: ico)")
    parser.add_argument("-i", "--index", type=int,
                        help="Zero-based icon resource index (default from config: 0)")
    size = parser.add_mutually_exclusive_group()
    size.add_argument("-l", "--large", dest="large", action="store_const", const=True, default=None,
                      help="Use the large icon variant")
    size.add_argument("-s", "--small", dest="large", action="store_const", const=False,
                      help="Use the small icon variant (default from config)")
    parser.add_argument("-o", "--output-name",
                        help="Output file name without extension (default from config: icon)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {VERSION}")
    return parser


def main(argv=None):
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    # Load configuration
    config = load_config()

    # Setup logging
    setup_logging(config, verbose=args.verbose)
    logging.debug(f"{APP_NAME} v{VERSION} starting up...")

    if args.output_name:
        config["EXTRACTION"]["output_basename"] = args.output_name

    # Check dependencies
    if not check_and_install_dependencies(config):
        logging.error("Failed to install required dependencies")
        return 1

    # Imported late so a missing image library is reported by the check above
    from icon_extractor.controllers.batch_controller import BatchController
    from icon_extractor.services.errors import UserCancelledError

    try:
        BatchController(config).run(args.paths, fmt=args.format, index=args.index, prefer_large=args.large)
    except UserCancelledError as e:
        logging.error(str(e))
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
