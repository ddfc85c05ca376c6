#!/usr/bin/env python3
"""
hardware-interfaces CLI
=======================

Inspect what a registry looks like for a given object manifest.

Usage:
    hardware-interfaces tree manifest.yaml            # Register and print the tree
    hardware-interfaces tree manifest.yaml --json     # Same, as JSON
    hardware-interfaces prune manifest.yaml --keep Lamp/Main/brightness
                                                      # Show what a prune removes
    hardware-interfaces map 50 0 100 0 10             # Clamped range mapping
"""

import argparse
import json
import sys
from typing import List, Optional

from hardware_interfaces.config import HardwareConfig, configure_logging
from hardware_interfaces.manifest import Manifest
from hardware_interfaces.registry import HardwareInterfaces
from hardware_interfaces.utils import map_range


def load_config(path: Optional[str]) -> HardwareConfig:
    if path:
        return HardwareConfig.from_yaml(path)
    return HardwareConfig()


def build_registry(args: argparse.Namespace) -> HardwareInterfaces:
    config = load_config(args.config)
    configure_logging(config)
    manifest = Manifest.from_yaml(args.manifest)
    hw = HardwareInterfaces(resolver=manifest.resolver(), config=config)
    manifest.advertise(hw)
    return hw


def cmd_tree(args: argparse.Namespace) -> int:
    """Print the object -> frame -> node tree."""
    hw = build_registry(args)

    if args.json:
        print(json.dumps({k: o.to_dict() for k, o in hw.objects.items()}, indent=2, default=str))
        return 0

    for object_id, obj in hw.objects.items():
        print(f"{obj.name} ({object_id}){'' if obj.active else ' [deactivated]'}")
        for frame in obj.frames.values():
            print(f"  {frame.name} ({frame.id})")
            for node in frame.nodes.values():
                print(f"    - {node.display_name} [{node.type}] at ({node.x}, {node.y})")
    return 0


def parse_keep(keep: List[str]) -> List[List[str]]:
    entries = []
    for item in keep:
        parts = item.split("/")
        if len(parts) != 3:
            raise ValueError(f"--keep expects OBJECT/FRAME/NODE, got {item!r}")
        entries.append(parts)
    return entries


def cmd_prune(args: argparse.Namespace) -> int:
    """Register the manifest, re-advertise only the kept nodes and prune."""
    try:
        keep = parse_keep(args.keep or [])
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    hw = build_registry(args)
    manifest_objects = list(hw.objects.values())
    for obj in manifest_objects:
        hw.begin_advertisement(obj.object_id)

    for object_name, frame_name, node_name in keep:
        hw.add_node(object_name, frame_name, node_name)

    removed: List[str] = []
    for obj in manifest_objects:
        removed.extend(hw.clear_object(obj.object_id))

    if args.json:
        print(json.dumps({"removed": removed}, indent=2))
    else:
        print(f"Removed {len(removed)} nodes:")
        for node_id in removed:
            print(f"  - {node_id}")
    return 0


def cmd_map(args: argparse.Namespace) -> int:
    print(map_range(args.x, args.in_min, args.in_max, args.out_min, args.out_max))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Hardware interfaces registry CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # tree
    p = subparsers.add_parser("tree", help="Register a manifest and print the tree")
    p.add_argument("manifest", help="Object manifest YAML file")
    p.add_argument("--config", help="Config YAML file")
    p.add_argument("--json", action="store_true", help="Output as JSON")
    p.set_defaults(func=cmd_tree)

    # prune
    p = subparsers.add_parser("prune", help="Show which nodes a prune would remove")
    p.add_argument("manifest", help="Object manifest YAML file")
    p.add_argument("--keep", action="append", metavar="OBJECT/FRAME/NODE",
                   help="Node to re-advertise before pruning (repeatable)")
    p.add_argument("--config", help="Config YAML file")
    p.add_argument("--json", action="store_true", help="Output as JSON")
    p.set_defaults(func=cmd_prune)

    # map
    p = subparsers.add_parser("map", help="Map a value between ranges")
    for name in ("x", "in_min", "in_max", "out_min", "out_max"):
        p.add_argument(name, type=float)
    p.set_defaults(func=cmd_map)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
