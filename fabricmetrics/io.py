"""Reading, writing, importing and exporting topology documents.

Documents use the dashboard's export format (camelCase field names) and may
be written as JSON or YAML. A document holds one topology object or a list
under ``topologies``. Every document is validated against the packaged JSON
schema ``fabricmetrics/schemas/topology.json`` before conversion, so the
engine only ever sees well-formed configurations.

Example (YAML):
    ```yaml
    topologies:
      - name: Small Leaf-Spine
        configuration:
          numSpines: 2
          numLeafs: 4
          numTiers: 2
          spineConfig: {portCount: 64, portSpeed: 400G, breakoutMode: 1x400G}
          leafConfig: {portCount: 48, downlinkSpeed: 100G, breakoutMode: 1x100G}
    ```
"""

from __future__ import annotations

import base64
import json
import re
import uuid
from datetime import date, datetime, timezone
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema
import yaml

from fabricmetrics.errors import ConfigurationError
from fabricmetrics.model.topology import (
    DeviceChoice,
    DeviceSelection,
    LatencyParameters,
    LeafConfig,
    PowerUsage,
    RackSpaceParameters,
    SpineConfig,
    SwitchCost,
    Topology,
    TopologyConfiguration,
)
from fabricmetrics.types import BreakoutOption, PortSpeed

EXPORT_VERSION = "1.0"


def new_topology_id() -> str:
    """Return a 22-character URL-safe identifier derived from a UUID4."""
    return base64.urlsafe_b64encode(uuid.uuid4().bytes)[:-2].decode("ascii")


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@lru_cache(maxsize=1)
def _schema() -> Dict[str, Any]:
    with (
        resources.files("fabricmetrics.schemas")
        .joinpath("topology.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def validate_document(data: Any) -> None:
    """Validate a parsed document against the topology schema.

    Raises:
        ConfigurationError: With the failing location when the document does
            not match the schema.
    """
    try:
        jsonschema.validate(data, _schema())
    except jsonschema.ValidationError as exc:
        # validate() already descends into oneOf for the most relevant error
        where = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        raise ConfigurationError(
            f"Invalid topology document at {where}: {exc.message}"
        ) from exc


# ----------------------------- dict -> model -----------------------------
def _speed_table(raw: Optional[Dict[str, Any]]) -> Optional[Dict[PortSpeed, float]]:
    if raw is None:
        return None
    return {PortSpeed.from_string(k): float(v) for k, v in raw.items()}


def _device_choice(raw: Optional[Dict[str, Any]]) -> Optional[DeviceChoice]:
    if raw is None:
        return None
    return DeviceChoice(
        device_id=str(raw["deviceId"]),
        use_default_config=bool(raw.get("useDefaultConfig", True)),
        cost_override=raw.get("costOverride"),
        power_override=raw.get("powerOverride"),
    )


def configuration_from_dict(data: Dict[str, Any]) -> TopologyConfiguration:
    """Build a configuration from its camelCase mapping.

    Optional sections missing from ``data`` take the model defaults.
    """
    spine = data["spineConfig"]
    leaf = data["leafConfig"]
    kwargs: Dict[str, Any] = {
        "num_spines": data["numSpines"],
        "num_leafs": data["numLeafs"],
        "num_tiers": data["numTiers"],
        "spine_config": SpineConfig(
            port_count=spine["portCount"],
            port_speed=spine["portSpeed"],
            breakout_mode=spine["breakoutMode"],
        ),
        "leaf_config": LeafConfig(
            port_count=leaf["portCount"],
            downlink_speed=leaf["downlinkSpeed"],
            breakout_mode=leaf["breakoutMode"],
            port_speed=leaf.get("portSpeed"),
        ),
        "disjointed_spines": bool(data.get("disjointedSpines", False)),
        "rail_optimized": bool(data.get("railOptimized", False)),
        "parallel_links_enabled": bool(data.get("parallelLinksEnabled", False)),
        "parallel_links_mode": data.get("parallelLinksMode") or "auto",
        "parallel_links_per_spine": data.get("parallelLinksPerSpine"),
    }

    if "breakoutOptions" in data:
        kwargs["breakout_options"] = {
            PortSpeed.from_string(speed): tuple(
                BreakoutOption(type=str(o["type"]), factor=int(o["factor"]))
                for o in options
            )
            for speed, options in data["breakoutOptions"].items()
        }
    if "switchCost" in data:
        kwargs["switch_cost"] = SwitchCost(
            spine=float(data["switchCost"]["spine"]),
            leaf=float(data["switchCost"]["leaf"]),
        )
    if "opticsCost" in data:
        kwargs["optics_cost"] = _speed_table(data["opticsCost"])
    if "powerUsage" in data:
        usage = data["powerUsage"]
        optics = _speed_table(usage.get("optics"))
        kwargs["power_usage"] = (
            PowerUsage(spine=float(usage["spine"]), leaf=float(usage["leaf"]))
            if optics is None
            else PowerUsage(
                spine=float(usage["spine"]), leaf=float(usage["leaf"]), optics=optics
            )
        )
    if "latencyParameters" in data:
        kwargs["latency_parameters"] = LatencyParameters(
            switch_latency=float(data["latencyParameters"]["switchLatency"]),
            fiber_latency=float(data["latencyParameters"]["fiberLatency"]),
        )
    if "rackSpaceParameters" in data:
        kwargs["rack_space_parameters"] = RackSpaceParameters(
            spine_rack_units=int(data["rackSpaceParameters"]["spineRackUnits"]),
            leaf_rack_units=int(data["rackSpaceParameters"]["leafRackUnits"]),
        )
    if "deviceSelection" in data:
        selection = data["deviceSelection"]
        kwargs["device_selection"] = DeviceSelection(
            spine=_device_choice(selection.get("spine")),
            leaf=_device_choice(selection.get("leaf")),
        )
    return TopologyConfiguration(**kwargs)


def topology_from_dict(data: Dict[str, Any]) -> Topology:
    """Build a :class:`Topology` from one already-validated topology mapping.

    A missing ``id`` gets a fresh identifier.
    """
    return Topology(
        id=str(data.get("id") or new_topology_id()),
        name=str(data["name"]),
        description=str(data.get("description", "")),
        created_at=str(data.get("createdAt", "")),
        updated_at=str(data.get("updatedAt", "")),
        imported_at=data.get("importedAt"),
        exported_at=data.get("exportedAt"),
        export_version=data.get("exportVersion"),
        configuration=configuration_from_dict(data["configuration"]),
    )


# ----------------------------- model -> dict -----------------------------
def _device_choice_to_dict(choice: Optional[DeviceChoice]) -> Optional[Dict[str, Any]]:
    if choice is None:
        return None
    out: Dict[str, Any] = {
        "deviceId": choice.device_id,
        "useDefaultConfig": choice.use_default_config,
    }
    if choice.cost_override is not None:
        out["costOverride"] = choice.cost_override
    if choice.power_override is not None:
        out["powerOverride"] = choice.power_override
    return out


def configuration_to_dict(config: TopologyConfiguration) -> Dict[str, Any]:
    """Serialize a configuration to the camelCase export format."""
    leaf: Dict[str, Any] = {
        "portCount": config.leaf_config.port_count,
        "downlinkSpeed": config.leaf_config.downlink_speed.value,
        "breakoutMode": config.leaf_config.breakout_mode,
    }
    if config.leaf_config.port_speed is not None:
        leaf["portSpeed"] = config.leaf_config.port_speed.value

    out: Dict[str, Any] = {
        "numSpines": config.num_spines,
        "numLeafs": config.num_leafs,
        "numTiers": config.num_tiers,
        "spineConfig": {
            "portCount": config.spine_config.port_count,
            "portSpeed": config.spine_config.port_speed.value,
            "breakoutMode": config.spine_config.breakout_mode,
        },
        "leafConfig": leaf,
        "breakoutOptions": {
            speed.value: [{"type": o.type, "factor": o.factor} for o in options]
            for speed, options in config.breakout_options.items()
        },
        "disjointedSpines": config.disjointed_spines,
        "railOptimized": config.rail_optimized,
        "parallelLinksEnabled": config.parallel_links_enabled,
        "parallelLinksMode": config.parallel_links_mode.value,
        "switchCost": {
            "spine": config.switch_cost.spine,
            "leaf": config.switch_cost.leaf,
        },
        "opticsCost": {s.value: v for s, v in config.optics_cost.items()},
        "powerUsage": {
            "spine": config.power_usage.spine,
            "leaf": config.power_usage.leaf,
            "optics": {s.value: v for s, v in config.power_usage.optics.items()},
        },
        "latencyParameters": {
            "switchLatency": config.latency_parameters.switch_latency,
            "fiberLatency": config.latency_parameters.fiber_latency,
        },
        "rackSpaceParameters": {
            "spineRackUnits": config.rack_space_parameters.spine_rack_units,
            "leafRackUnits": config.rack_space_parameters.leaf_rack_units,
        },
    }
    if config.parallel_links_per_spine is not None:
        out["parallelLinksPerSpine"] = config.parallel_links_per_spine
    if config.device_selection is not None:
        selection = {
            role: _device_choice_to_dict(getattr(config.device_selection, role))
            for role in ("spine", "leaf")
        }
        out["deviceSelection"] = {k: v for k, v in selection.items() if v is not None}
    return out


def topology_to_dict(topology: Topology) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "id": topology.id,
        "name": topology.name,
        "description": topology.description,
        "createdAt": topology.created_at,
        "updatedAt": topology.updated_at,
        "configuration": configuration_to_dict(topology.configuration),
    }
    for key, value in (
        ("importedAt", topology.imported_at),
        ("exportedAt", topology.exported_at),
        ("exportVersion", topology.export_version),
    ):
        if value is not None:
            out[key] = value
    return out


# ------------------------------ documents -------------------------------
def load_topology_document(text: str) -> List[Topology]:
    """Parse, validate and convert a JSON or YAML topology document.

    Args:
        text: Document contents. JSON parses as YAML, so one loader serves both.

    Returns:
        Topologies in document order.

    Raises:
        ConfigurationError: Unparsable text, schema violations, or invalid
            field values.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Cannot parse topology document: {exc}") from exc
    return topologies_from_data(data)


def topologies_from_data(data: Any) -> List[Topology]:
    """Validate an already-parsed document and convert its topologies.

    Raises:
        ConfigurationError: Schema violations or invalid field values.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("A topology document must map to an object.")
    validate_document(data)
    entries = data["topologies"] if "topologies" in data else [data]
    return [topology_from_dict(entry) for entry in entries]


def load_topologies(path: Path) -> List[Topology]:
    """Read a topology document from ``path``."""
    return load_topology_document(Path(path).read_text(encoding="utf-8"))


def export_topology(topology: Topology, now: Optional[str] = None) -> Dict[str, Any]:
    """Return the export payload: the topology stamped with export metadata.

    The topology itself is not modified.
    """
    data = topology_to_dict(topology)
    data["exportedAt"] = now or _utc_now()
    data["exportVersion"] = EXPORT_VERSION
    return data


def dump_topology_json(topology: Topology, now: Optional[str] = None) -> str:
    return json.dumps(export_topology(topology, now), indent=2)


def export_filename(topology: Topology, day: Optional[date] = None) -> str:
    """Suggested file name, e.g. ``Small_Leaf-Spine_2024-05-01.json``."""
    day = day or datetime.now(timezone.utc).date()
    stem = re.sub(r"\s+", "_", topology.name)
    return f"{stem}_{day.isoformat()}.json"


def import_topology(data: Dict[str, Any], now: Optional[str] = None) -> Topology:
    """Accept an exported topology as a new record.

    The imported copy gets a fresh id, fresh created/updated/imported
    timestamps, and ``" (Imported)"`` appended to its name.

    Raises:
        ConfigurationError: ``data`` is not a valid single topology.
    """
    if not isinstance(data, dict) or "topologies" in data:
        raise ConfigurationError("Import expects a single topology object.")
    validate_document(data)
    stamp = now or _utc_now()
    source = topology_from_dict(data)
    return Topology(
        id=new_topology_id(),
        name=f"{source.name} (Imported)",
        description=source.description,
        created_at=stamp,
        updated_at=stamp,
        imported_at=stamp,
        exported_at=source.exported_at,
        export_version=source.export_version,
        configuration=source.configuration,
    )
