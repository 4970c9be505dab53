#!/usr/bin/env python3
"""
Command line tool for job artifact configuration.

Provides CLI commands for:
- Validating every job's artifact declarations against the artifact stores
- Listing artifact stores and the artifacts each job declares
- Showing the canonical JSON of one pluggable artifact
"""
import argparse
import json
import sys

from config_system.config_loader import ConfigLoader
from exceptions import ArtifactConfigError
from logging_config import setup_logging, log_step_start, log_step_complete, log_error


def validate_command(args, logger):
    """Validate all jobs and print the error report."""
    log_step_start(logger, "ArtifactValidator", "validation", "Starting artifact validation", {
        "config": args.config
    })

    loader = ConfigLoader(args.config)
    report = loader.validate_jobs()
    print(json.dumps({"valid": not report, "jobs": report}, indent=2, ensure_ascii=False))

    log_step_complete(logger, "ArtifactValidator", "validation", "Artifact validation completed", {
        "status": "success" if not report else "failed",
        "invalid_jobs": sorted(report.keys())
    })
    return not report


def list_command(args, logger):
    """List artifact stores and job artifacts."""
    log_step_start(logger, "ArtifactLister", "listing", "Listing artifact configuration", {
        "config": args.config
    })

    loader = ConfigLoader(args.config)
    stores = loader.load_artifact_stores().ids()
    jobs = {
        job.name: [artifact.to_canonical_form().get("id") or str(artifact) for artifact in job.artifacts]
        for job in loader.load_jobs()
    }

    log_step_complete(logger, "ArtifactLister", "listing", "Artifact configuration listing completed", {
        "artifact_stores": stores,
        "jobs": jobs,
        "artifact_stores_count": len(stores),
        "jobs_count": len(jobs)
    })
    return True


def show_command(args, logger):
    """Print the canonical JSON of a pluggable artifact."""
    loader = ConfigLoader(args.config)
    artifact = loader.find_artifact(args.job, args.artifact)
    print(artifact.to_json())

    log_step_complete(logger, "ArtifactViewer", "show", "Pluggable artifact rendered", {
        "job": args.job,
        "artifact": args.artifact
    })
    return True


def build_parser():
    parser = argparse.ArgumentParser(
        description="Job artifact configuration CLI",
        epilog="Examples:\n"
               "  %(prog)s --config pipeline.yaml validate\n"
               "  %(prog)s --config pipeline.yaml list\n"
               "  %(prog)s --config pipeline.yaml show --job package --artifact installer",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--config",
        default="./pipeline.yaml",
        help="Configuration file to read (default: ./pipeline.yaml)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level (default: INFO, can also be set via ARTIFACT_CONFIG_LOG_LEVEL env var)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging (equivalent to --log-level DEBUG)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    subparsers.add_parser("validate", help="Validate all artifact declarations")
    subparsers.add_parser("list", help="List artifact stores and job artifacts")

    show_parser = subparsers.add_parser("show", help="Show a pluggable artifact as JSON")
    show_parser.add_argument("--job", required=True, help="Job that declares the artifact")
    show_parser.add_argument("--artifact", required=True, help="Pluggable artifact id")
    return parser


COMMANDS = {
    "validate": validate_command,
    "list": list_command,
    "show": show_command,
}


def main(argv=None):
    """Main CLI entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config_logger = setup_logging(log_level=args.log_level, verbose=args.verbose)
    logger = config_logger.get_logger("cli_config")

    try:
        success = COMMANDS[args.command](args, logger)
    except ArtifactConfigError as e:
        log_error(logger, f"Command '{args.command}' failed: {str(e)}", "CLI", e)
        return 1

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())
