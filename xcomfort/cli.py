"""
Command line interface for the xComfort library.

Reads gateway credentials from a YAML config file with an 'xcomfort' section:

    xcomfort:
      base_url: http://192.168.1.100
      username: admin
      password: secret
      remote_key: ABCD1234
      import_setup_path: xcomfort.yaml
"""

import argparse
import json
import logging
from typing import Callable, Optional

from colorama import Fore, Style

from .interface import XComfort
from .exceptions import XComfortError
from .utils import run_with_keyboard_interrupt


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xcomfort", description="Control xComfort devices and scenes")
    parser.add_argument("-c", "--config", default="config.yaml", help="YAML config file (default: config.yaml)")
    parser.add_argument("--setup", dest="import_setup_path", help="Setup file with devices and scenes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log and print gateway traffic")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("names", help="List known device and scene names")

    dim = commands.add_parser("dim", help="Switch or dim a device")
    dim.add_argument("device")
    dim.add_argument("value", help="on, off or 0-100")

    scene = commands.add_parser("scene", help="Trigger a scene")
    scene.add_argument("scene")

    query = commands.add_parser("query", help="Call a raw JSON-RPC method")
    query.add_argument("method")
    query.add_argument("params", nargs="?", default="[]", help="JSON list of parameters")
    return parser


def parse_state(value: str) -> str | int:
    """Command line values are strings; dim levels are sent as integers."""
    return int(value) if value.lstrip("-").isdigit() else value


async def run(args: argparse.Namespace, factory: Optional[Callable[..., XComfort]] = None) -> int:
    factory = factory or XComfort.from_config
    overrides = {"print_traffic": args.verbose}
    if args.import_setup_path:
        overrides["import_setup_path"] = args.import_setup_path
    try:
        async with factory(args.config, **overrides) as xc:
            match args.command:
                case "names":
                    names = xc.get_name_object()
                    print(Fore.CYAN + "Devices" + Style.RESET_ALL)
                    for name in names["devices"]:
                        print(f"  • {name}")
                    print(Fore.CYAN + "Scenes" + Style.RESET_ALL)
                    for name in names["scenes"]:
                        print(f"  • {name}")
                    return 0
                case "dim":
                    ok = await xc.set_dim_state(args.device, parse_state(args.value))
                case "scene":
                    ok = await xc.trigger_scene(args.scene)
                case "query":
                    result = await xc.query(args.method, json.loads(args.params))
                    print(json.dumps(result, indent=2))
                    return 0
            print((Fore.GREEN + "ok") if ok else (Fore.YELLOW + "not ok"), end=Style.RESET_ALL + "\n")
            return 0 if ok else 1
    except XComfortError as e:
        print(Fore.RED + f"{type(e).__name__}: {e}" + Style.RESET_ALL)
        return 1


def main(argv: Optional[list[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    run_with_keyboard_interrupt(lambda: run(args))


if __name__ == "__main__":
    main()
