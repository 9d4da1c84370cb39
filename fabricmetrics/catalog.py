"""Device and DeviceCatalog classes for switch cost/power lookups."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field, replace
from importlib import resources
from typing import Any, Dict, List, Optional, Tuple

import yaml

from fabricmetrics.errors import ConfigurationError
from fabricmetrics.logging import get_logger
from fabricmetrics.model.topology import DeviceChoice, TopologyConfiguration
from fabricmetrics.types import PortSpeed

logger = get_logger(__name__)

SPINE = "spine"
LEAF = "leaf"
ROLES = (SPINE, LEAF)


def _string_keys(data: Dict[Any, Any]) -> Dict[str, Any]:
    """Stringify mapping keys; YAML reads bare keys like ``on`` as booleans."""
    return {str(k): v for k, v in data.items()}


@dataclass(frozen=True)
class PortConfiguration:
    """One front-panel port layout a device ships with."""

    count: int
    speed: PortSpeed
    breakout_options: Tuple[str, ...] = ()


@dataclass
class Device:
    """A switch model that can fill the spine or leaf role.

    Attributes:
        id: Catalog identifier referenced by ``DeviceChoice.device_id``.
        manufacturer: Vendor name.
        model: Model name.
        description: Human-readable description.
        port_configurations: Supported port layouts; the first is the default.
        downlink_options: Endpoint-facing speeds, for leaf-capable devices.
        power_watts: Typical power draw of one unit.
        power_watts_max: Peak power draw of one unit.
        rack_units: Height in rack units.
        cost: Price of one unit.
        roles: Roles this device may fill.
        attrs: Unrecognized keys from the source definition.
    """

    id: str
    manufacturer: str = ""
    model: str = ""
    description: str = ""
    port_configurations: List[PortConfiguration] = field(default_factory=list)
    downlink_options: List[PortSpeed] = field(default_factory=list)
    power_watts: float = 0.0
    power_watts_max: float = 0.0
    rack_units: int = 1
    cost: float = 0.0
    roles: Tuple[str, ...] = (SPINE,)
    attrs: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model}".strip() or self.id

    def supports(self, role: str) -> bool:
        return role in self.roles


@dataclass
class DeviceCatalog:
    """Holds switch models keyed by id.

    Example (YAML):
        devices:
          arista-7050x4:
            manufacturer: Arista
            model: 7050X4
            port_configurations:
              - {count: 32, speed: 400G, breakout_options: [1x400G, 4x100G]}
            downlink_options: [25G, 100G]
            power_watts: 650
            rack_units: 1
            cost: 28000

    Without an explicit ``roles`` list every device can be a spine, and
    devices with ``downlink_options`` can also be a leaf.
    """

    devices: Dict[str, Device] = field(default_factory=dict)

    def get(self, device_id: str) -> Optional[Device]:
        """Return the device with ``device_id``, or None if not found."""
        return self.devices.get(device_id)

    def devices_for_role(self, role: str) -> List[Device]:
        """Return devices that can fill ``role``, in catalog order.

        Raises:
            ConfigurationError: ``role`` is neither spine nor leaf.
        """
        if role not in ROLES:
            raise ConfigurationError(f"Unknown device role '{role}'")
        return [d for d in self.devices.values() if d.supports(role)]

    def merge(self, other: DeviceCatalog, override: bool = True) -> DeviceCatalog:
        """Merge ``other`` into this catalog in place.

        Args:
            other: Catalog to merge in.
            override: If True, devices in ``other`` replace existing ones.

        Returns:
            DeviceCatalog: This instance.
        """
        for device_id, device in other.devices.items():
            if override or device_id not in self.devices:
                self.devices[device_id] = device
        return self

    def clone(self) -> DeviceCatalog:
        return DeviceCatalog(devices=deepcopy(self.devices))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DeviceCatalog:
        """Build a catalog from raw device definitions keyed by id."""
        devices: Dict[str, Device] = {}
        for device_id, definition in _string_keys(data).items():
            if not isinstance(definition, dict):
                raise ConfigurationError(
                    f"Device '{device_id}' must be a mapping, got "
                    f"{type(definition).__name__}"
                )
            devices[device_id] = cls._build_device(device_id, definition)
        return DeviceCatalog(devices=devices)

    @classmethod
    def _build_device(cls, device_id: str, definition: Dict[str, Any]) -> Device:
        ports = [
            PortConfiguration(
                count=int(p["count"]),
                speed=PortSpeed.from_string(p["speed"]),
                breakout_options=tuple(p.get("breakout_options", ())),
            )
            for p in definition.get("port_configurations", [])
        ]
        downlinks = [
            PortSpeed.from_string(s) for s in definition.get("downlink_options", [])
        ]

        roles = definition.get("roles")
        if roles is None:
            roles = [SPINE, LEAF] if downlinks else [SPINE]
        for role in roles:
            if role not in ROLES:
                raise ConfigurationError(
                    f"Device '{device_id}' has unknown role '{role}'"
                )

        recognized_keys = {
            "manufacturer",
            "model",
            "description",
            "port_configurations",
            "downlink_options",
            "power_watts",
            "power_watts_max",
            "rack_units",
            "cost",
            "roles",
            "attrs",
        }
        attrs: Dict[str, Any] = _string_keys(dict(definition.get("attrs", {})))
        attrs.update(
            _string_keys(
                {k: v for k, v in definition.items() if k not in recognized_keys}
            )
        )

        return Device(
            id=device_id,
            manufacturer=str(definition.get("manufacturer", "")),
            model=str(definition.get("model", "")),
            description=definition.get("description", ""),
            port_configurations=ports,
            downlink_options=downlinks,
            power_watts=float(definition.get("power_watts", 0.0)),
            power_watts_max=float(definition.get("power_watts_max", 0.0)),
            rack_units=int(definition.get("rack_units", 1)),
            cost=float(definition.get("cost", 0.0)),
            roles=tuple(roles),
            attrs=attrs,
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> DeviceCatalog:
        """Build a catalog from YAML text.

        A top-level ``devices`` key is used when present; otherwise the whole
        document is treated as device definitions.

        Raises:
            ConfigurationError: The top level, or ``devices``, is not a mapping.
        """
        data = yaml.safe_load(yaml_str)
        if not isinstance(data, dict):
            raise ConfigurationError("Top-level must be a dict in device catalog YAML.")

        devices_data = data.get("devices") or data
        if not isinstance(devices_data, dict):
            raise ConfigurationError("'devices' must be a dict if present.")

        return cls.from_dict(devices_data)

    @classmethod
    def builtin(cls) -> DeviceCatalog:
        """Return a fresh copy of the packaged catalog."""
        text = resources.files("fabricmetrics.data").joinpath("devices.yaml").read_text(
            encoding="utf-8"
        )
        return cls.from_yaml(text)


def _selected(
    catalog: DeviceCatalog, choice: Optional[DeviceChoice], role: str
) -> Optional[Device]:
    if choice is None:
        return None
    device = catalog.get(choice.device_id)
    if device is None:
        raise ConfigurationError(f"Unknown {role} device '{choice.device_id}'")
    if not device.supports(role):
        raise ConfigurationError(
            f"Device '{choice.device_id}' cannot be used as a {role}"
        )
    return device


def apply_device_selection(
    config: TopologyConfiguration, catalog: DeviceCatalog
) -> TopologyConfiguration:
    """Return ``config`` with switch cost, power and rack units from its devices.

    Cost and power overrides on a ``DeviceChoice`` win over the catalog
    values. Port layout is left as configured. A configuration without a
    device selection is returned unchanged.

    Raises:
        ConfigurationError: A selected id is unknown or cannot fill its role.
    """
    selection = config.device_selection
    if selection is None:
        return config

    spine = _selected(catalog, selection.spine, SPINE)
    leaf = _selected(catalog, selection.leaf, LEAF)

    def unit(device: Optional[Device], choice, attr: str, current: float) -> float:
        if device is None:
            return current
        override = getattr(choice, f"{attr}_override")
        if override is not None:
            return float(override)
        return device.cost if attr == "cost" else device.power_watts

    switch_cost = replace(
        config.switch_cost,
        spine=unit(spine, selection.spine, "cost", config.switch_cost.spine),
        leaf=unit(leaf, selection.leaf, "cost", config.switch_cost.leaf),
    )
    power_usage = replace(
        config.power_usage,
        spine=unit(spine, selection.spine, "power", config.power_usage.spine),
        leaf=unit(leaf, selection.leaf, "power", config.power_usage.leaf),
    )
    rack = config.rack_space_parameters
    rack = replace(
        rack,
        spine_rack_units=spine.rack_units if spine else rack.spine_rack_units,
        leaf_rack_units=leaf.rack_units if leaf else rack.leaf_rack_units,
    )
    logger.debug(
        f"Applied device selection: spine={spine.id if spine else None} "
        f"leaf={leaf.id if leaf else None}"
    )
    return config.replace(
        switch_cost=switch_cost,
        power_usage=power_usage,
        rack_space_parameters=rack,
    )
