from typing import Optional

from ..api.models import XComfortDevice, XComfortScene


class XComfortDirectory:
    """Maps human-readable device and scene names to gateway addresses. Lookups are exact and case-sensitive."""

    def __init__(self):
        self.devices: dict[str, XComfortDevice] = {}
        self.scenes: dict[str, XComfortScene] = {}

    def __repr__(self) -> str:
        return f"XComfortDirectory<{len(self.devices)} devices, {len(self.scenes)} scenes>"

    def add_device(self, name: str, zone_id: str, id: str, type: str) -> XComfortDevice:
        device = XComfortDevice(zone_id=zone_id, id=id, type=type)
        self.devices[name] = device
        return device

    def add_scene(self, name: str, zone_id: str, id: str) -> XComfortScene:
        scene = XComfortScene(zone_id=zone_id, id=id)
        self.scenes[name] = scene
        return scene

    def remove_device(self, name: str) -> bool:
        return self.devices.pop(name, None) is not None

    def remove_scene(self, name: str) -> bool:
        return self.scenes.pop(name, None) is not None

    def get_device(self, name: str) -> Optional[XComfortDevice]:
        return self.devices.get(name)

    def get_scene(self, name: str) -> Optional[XComfortScene]:
        return self.scenes.get(name)

    def device_names(self) -> list[str]:
        return list(self.devices)

    def scene_names(self) -> list[str]:
        return list(self.scenes)

    def name_object(self) -> dict[str, list[str]]:
        return {
            "devices": self.device_names(),
            "scenes": self.scene_names(),
        }

    def clear(self) -> None:
        self.devices.clear()
        self.scenes.clear()
