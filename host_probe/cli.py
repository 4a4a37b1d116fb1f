"""Command-line interface for host-probe."""

import argparse
import json
import logging
import sys
from typing import Any

from host_probe.config import CONFIG_PATHS, Config
from host_probe.encoder.selector import EncoderSelection, EncoderSelector
from host_probe.platforms.base import HostQueryError, get_platform
from host_probe.system import classifier
from host_probe.system.detector import HostCapabilityProbe

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _make_probe(config: Config) -> HostCapabilityProbe:
    return HostCapabilityProbe(get_platform(query_timeout=config.query_timeout))


def _selection_to_dict(selection: EncoderSelection) -> dict[str, Any]:
    return {
        "generation": selection.generation.name,
        "generation_label": selection.generation.label,
        "hardware_supported": selection.hardware_supported,
        "preset": selection.preset.name,
        "available_presets": selection.available_presets,
        "capabilities": [c.value for c in selection.capabilities],
        "reason": selection.reason,
    }


def cmd_info(args: argparse.Namespace) -> int:
    """Handle the info command."""
    config = Config.load()
    probe = _make_probe(config)
    info = probe.detect()
    selection = EncoderSelector(probe).select(config.preferred_preset)

    if args.json:
        data = {
            "total_memory_mb": info.total_memory_mb,
            "processor_name": info.processor_name,
            "is_recent_generation": info.is_recent_generation,
            "is_mid_generation": info.is_mid_generation,
            "display": (
                {
                    "x": info.display.x,
                    "y": info.display.y,
                    "width": info.display.width,
                    "height": info.display.height,
                }
                if info.display
                else None
            ),
            "encoder": _selection_to_dict(selection),
        }
        print(json.dumps(data, indent=2))
        return 0

    print(f"Total Memory:      {info.total_memory_mb} MB")
    print(f"Processor:         {info.processor_name or 'unavailable'}")
    print(f"Recent Generation: {'Yes' if info.is_recent_generation else 'No'}")
    print(f"Mid Generation:    {'Yes' if info.is_mid_generation else 'No'}")
    print(f"Primary Display:   {info.display or 'none (headless)'}")

    # Also show the encoder recommendation
    print(f"\nRecommended Encoder Preset: {selection.preset.name}")
    print(f"  Generation: {selection.generation.name} ({selection.generation.label})")
    print(f"  Reason: {selection.reason}")

    return 0


def cmd_memory(args: argparse.Namespace) -> int:
    """Handle the memory command."""
    probe = _make_probe(Config.load())
    print(probe.total_physical_memory_mb())
    return 0


def cmd_cpu(args: argparse.Namespace) -> int:
    """Handle the cpu command."""
    probe = _make_probe(Config.load())
    identity = probe.processor_identity()
    generation = classifier.processor_generation(identity)
    is_recent = classifier.is_recent_generation(identity)
    is_mid = classifier.is_mid_generation(identity)

    if args.json:
        data = {
            "processor_name": identity,
            "is_recent_generation": is_recent,
            "is_mid_generation": is_mid,
            "generation": generation.name,
        }
        print(json.dumps(data, indent=2))
        return 0

    print(f"Processor:         {identity or 'unavailable'}")
    print(f"Recent Generation: {'Yes' if is_recent else 'No'}")
    print(f"Mid Generation:    {'Yes' if is_mid else 'No'}")
    print(f"Generation:        {generation.name} ({generation.label})")
    return 0


def cmd_display(args: argparse.Namespace) -> int:
    """Handle the display command."""
    probe = _make_probe(Config.load())
    bounds = probe.primary_display_bounds()

    if args.json:
        data = {"x": bounds.x, "y": bounds.y, "width": bounds.width, "height": bounds.height}
        print(json.dumps(data, indent=2))
    else:
        print(bounds)
    return 0


def cmd_encoder(args: argparse.Namespace) -> int:
    """Handle the encoder command - show Quick Sync defaults for this host."""
    config = Config.load()
    probe = _make_probe(config)
    selection = EncoderSelector(probe).select(args.preset or config.preferred_preset)

    if args.json:
        print(json.dumps(_selection_to_dict(selection), indent=2))
        return 0

    print("Quick Sync Encoder Defaults")
    print("=" * 60)
    print(f"Processor:   {selection.processor_name or 'unavailable'}")
    print(f"Generation:  {selection.generation.name} ({selection.generation.label})")
    print(f"Hardware:    {'Supported' if selection.hardware_supported else 'Not supported'}")
    print()

    for name in selection.available_presets:
        marker = " ★ SELECTED" if name == selection.preset.name else ""
        print(f"[{name.upper()}]{marker}")

    print()
    capabilities = ", ".join(c.value for c in selection.capabilities) or "none"
    print(f"Capabilities: {capabilities}")
    print(f"Reason:       {selection.reason}")
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Handle the config command."""
    config = Config.load()

    if args.validate:
        issues = config.validate()
        if issues:
            print("Configuration issues:")
            for issue in issues:
                print(f"  - {issue}")
            return 1
        print("Configuration is valid")
        return 0

    if args.show:
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    if args.init:
        config_path = CONFIG_PATHS[0]
        if config_path.exists() and not args.force:
            print(f"Config already exists at {config_path}")
            print("Use --force to overwrite")
            return 1
        config.save(config_path)
        print(f"Config initialized at {config_path}")
        return 0

    # Default: show config path
    for path in CONFIG_PATHS:
        if path.exists():
            print(f"Config loaded from: {path}")
            return 0

    print("No config file found, using defaults")
    print(f"Create one at: {CONFIG_PATHS[0]}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="host-probe",
        description="Report host memory, processor and display capabilities",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    info_parser = subparsers.add_parser(
        "info",
        help="Show all host capabilities and the recommended encoder preset",
    )
    info_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    subparsers.add_parser(
        "memory",
        help="Show total physical memory in MB",
    )

    cpu_parser = subparsers.add_parser(
        "cpu",
        help="Show processor identity and generation heuristics",
    )
    cpu_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    display_parser = subparsers.add_parser(
        "display",
        help="Show primary display bounds",
    )
    display_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    encoder_parser = subparsers.add_parser(
        "encoder",
        help="Show Quick Sync encoder defaults for this host",
    )
    encoder_parser.add_argument(
        "--preset",
        help="Preferred preset (falls back to the default if unavailable)",
    )
    encoder_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )

    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
    )
    config_parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the configuration",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        help="Initialize default configuration file",
    )
    config_parser.add_argument(
        "--force",
        action="store_true",
        help="Force overwrite existing config",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "memory": cmd_memory,
        "cpu": cmd_cpu,
        "display": cmd_display,
        "encoder": cmd_encoder,
        "config": cmd_config,
    }

    cmd_func = commands.get(args.command)
    if cmd_func is None:
        parser.print_help()
        return 1

    try:
        return cmd_func(args)
    except HostQueryError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
