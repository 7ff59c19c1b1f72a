"""
Directory setup for xComfort clients.

A setup file is YAML listing the devices and scenes the client should know by name:

    devices:
      Kitchen:
        zone_id: hz_1
        id: xCo:5281580_u0
        type: DimActuator
    scenes:
      Evening:
        zone_id: hz_1
        id: MA23

Order in the file is the order names are listed by the client.
"""

import logging
import os
from typing import Any, TYPE_CHECKING

import yaml

from .api.types import Const
from .exceptions import XComfortConfigurationError

if TYPE_CHECKING:
    from .interface import XComfort

logger = logging.getLogger(__name__)


def import_setup(path: str, client: "XComfort") -> None:
    """Populate the client's directory from a setup file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            setup = yaml.safe_load(f) or {}
    except OSError as e:
        raise XComfortConfigurationError(f"Cannot read setup file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise XComfortConfigurationError(f"Setup file {path} is not valid YAML: {e}") from e

    if not isinstance(setup, dict):
        raise XComfortConfigurationError(f"Setup file {path} must contain a mapping")

    devices = _section(setup, "devices", path)
    scenes = _section(setup, "scenes", path)

    for name, entry in devices.items():
        _require(entry, ("zone_id", "id", "type"), f"device {name!r}", path)
        client.directory.add_device(str(name), zone_id=str(entry["zone_id"]), id=str(entry["id"]), type=str(entry["type"]))
    for name, entry in scenes.items():
        _require(entry, ("zone_id", "id"), f"scene {name!r}", path)
        client.directory.add_scene(str(name), zone_id=str(entry["zone_id"]), id=str(entry["id"]))

    logger.info(f"Imported {len(devices)} devices and {len(scenes)} scenes from {path}")


def export_setup(path: str, client: "XComfort") -> None:
    """Write the client's directory to a setup file that import_setup can read back."""
    setup = {
        "devices": {
            name: {"zone_id": device.zone_id, "id": device.id, "type": device.type}
            for name, device in client.directory.devices.items()
        },
        "scenes": {
            name: {"zone_id": scene.zone_id, "id": scene.id}
            for name, scene in client.directory.scenes.items()
        },
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(setup, f, sort_keys=False, allow_unicode=True)
    logger.info(f"Exported {len(setup['devices'])} devices and {len(setup['scenes'])} scenes to {path}")


def initial_setup(client: "XComfort") -> None:
    """Automatic setup: load the default setup file if there is one."""
    if os.path.exists(Const.DEFAULT_SETUP_FILE):
        import_setup(Const.DEFAULT_SETUP_FILE, client)
    else:
        logger.warning(f"No {Const.DEFAULT_SETUP_FILE} found, device and scene directory is empty")


def _section(setup: dict, key: str, path: str) -> dict[str, Any]:
    section = setup.get(key) or {}
    if not isinstance(section, dict):
        raise XComfortConfigurationError(f"'{key}' in {path} must be a mapping of names")
    return section


def _require(entry: Any, keys: tuple[str, ...], what: str, path: str) -> None:
    if not isinstance(entry, dict):
        raise XComfortConfigurationError(f"{what} in {path} must be a mapping")
    missing = [k for k in keys if entry.get(k) in (None, "")]
    if missing:
        raise XComfortConfigurationError(f"{what} in {path} is missing {', '.join(missing)}")
