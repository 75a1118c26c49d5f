"""CLI entry point for ingress2haproxy.

Subcommands:
    render     Build and render the HAProxy configuration for a snapshot.
    userlists  Show the userlists built from a snapshot's credential files.
    info       Show the loaded configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_DEFAULT_CONFIG = "ingress2haproxy.toml"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _load_config(args: argparse.Namespace):
    """Load configuration, handling errors.

    Without -c, a missing ./ingress2haproxy.toml means built-in defaults.
    """
    import tomllib

    from ingress2haproxy.config import ControllerConfig, load_config

    config_path = getattr(args, "config", None)
    if config_path is None and not Path(_DEFAULT_CONFIG).exists():
        return ControllerConfig()
    try:
        return load_config(config_path)
    except FileNotFoundError:
        path = config_path or _DEFAULT_CONFIG
        print(f"Error: config file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except tomllib.TOMLDecodeError as e:
        print(f"Error: invalid config file: {e}", file=sys.stderr)
        sys.exit(1)


def _load_snapshot(args: argparse.Namespace, config):
    """Load the ingress snapshot named on the command line or in config."""
    import json

    from ingress2haproxy.sources.snapshot import load_snapshot

    path = getattr(args, "snapshot", None) or config.snapshot.path
    if not path:
        print("Error: no snapshot given (use --snapshot or [snapshot] path)", file=sys.stderr)
        sys.exit(1)
    try:
        return load_snapshot(path, default_ssl_redirect=config.snapshot.default_ssl_redirect)
    except FileNotFoundError:
        print(f"Error: snapshot file not found: {path}", file=sys.stderr)
        sys.exit(1)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        print(f"Error: invalid snapshot {path}: {e}", file=sys.stderr)
        sys.exit(1)


# ---------------------------------------------------------------------------
# Subcommand: render
# ---------------------------------------------------------------------------

def cmd_render(args: argparse.Namespace) -> int:
    """Build the configuration for a snapshot and render it."""
    from ingress2haproxy.controller import HAProxyController
    from ingress2haproxy.errors import RenderError, TemplateLoadError
    from ingress2haproxy.generators.haproxy import HAProxyTemplate

    config = _load_config(args)
    snapshot = _load_snapshot(args, config)

    template_path = args.template or config.template.path
    try:
        renderer = HAProxyTemplate(template_path) if template_path else HAProxyTemplate.default()
    except TemplateLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    controller = HAProxyController(renderer)
    try:
        output = controller.on_update(snapshot, config.overrides)
    except RenderError as e:
        print(f"Error: render failed: {e}", file=sys.stderr)
        return 1

    output_path = config.output.path
    if output_path and not args.stdout:
        Path(output_path).write_bytes(output)
        print(f"  haproxy: wrote {output_path} ({len(output)} bytes)")
    else:
        sys.stdout.write(output.decode("utf-8"))
    return 0


# ---------------------------------------------------------------------------
# Subcommand: userlists
# ---------------------------------------------------------------------------

def cmd_userlists(args: argparse.Namespace) -> int:
    """Show the userlists a snapshot's locations resolve to."""
    from ingress2haproxy.derivations.userlists import build_userlists

    config = _load_config(args)
    snapshot = _load_snapshot(args, config)

    userlists = build_userlists(snapshot.servers)
    if not userlists:
        print("No userlists.")
        return 0

    for file_name, userlist in userlists.items():
        realm = userlist.realm or "(no realm)"
        print(f"{userlist.list_name}: {len(userlist.users)} user(s), realm {realm}")
        print(f"  file: {file_name}")
        for user in userlist.users:
            kind = "encrypted" if user.encrypted else "plain"
            print(f"  {user.username} ({kind})")
    return 0


# ---------------------------------------------------------------------------
# Subcommand: info
# ---------------------------------------------------------------------------

def cmd_info(args: argparse.Namespace) -> int:
    """Show configuration info."""
    config = _load_config(args)

    print(f"Template: {config.template.path or '(packaged default)'}")
    print(f"Output:   {config.output.path or '(stdout)'}")
    print(f"Snapshot: {config.snapshot.path or '(none)'}")
    print(f"Default SSL redirect: {config.snapshot.default_ssl_redirect}")
    print()

    print("Overrides:")
    if not config.overrides:
        print("  (none)")
    for key, value in sorted(config.overrides.items()):
        print(f"  {key} = {value}")

    return 0


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="ingress2haproxy",
        description="Render HAProxy configuration from an ingress snapshot.",
    )
    parser.add_argument(
        "-c", "--config",
        help=f"Path to {_DEFAULT_CONFIG} (default: ./{_DEFAULT_CONFIG})",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Render HAProxy configuration")
    render_parser.add_argument("--snapshot", help="Ingress snapshot JSON file")
    render_parser.add_argument("--template", help="HAProxy template file")
    render_parser.add_argument(
        "--stdout", action="store_true",
        help="Print output to stdout instead of writing the output file",
    )

    # userlists
    userlists_parser = subparsers.add_parser("userlists", help="Show basic auth userlists")
    userlists_parser.add_argument("--snapshot", help="Ingress snapshot JSON file")

    # info
    subparsers.add_parser("info", help="Show configuration")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    _configure_logging(args.log_level)

    commands = {
        "render": cmd_render,
        "userlists": cmd_userlists,
        "info": cmd_info,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
