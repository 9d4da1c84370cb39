"""Built-in topology templates.

Templates live in the packaged ``data/templates.yaml`` and are parsed through
the regular document loader, so they obey the same schema as user files.
"""

from __future__ import annotations

from dataclasses import replace
from functools import lru_cache
from importlib import resources
from typing import List, Optional, Tuple

import yaml

from fabricmetrics.io import topologies_from_data
from fabricmetrics.model.topology import Topology


@lru_cache(maxsize=1)
def _load_templates() -> Tuple[Topology, ...]:
    text = resources.files("fabricmetrics.data").joinpath("templates.yaml").read_text(
        encoding="utf-8"
    )
    data = yaml.safe_load(text)
    # Shared anchor block, not a template itself
    data.pop("base", None)
    return tuple(topologies_from_data(data))


def list_templates() -> List[Topology]:
    """Return all templates in display order."""
    return list(_load_templates())


def get_template(name: str) -> Optional[Topology]:
    """Return the template called ``name`` (case-insensitive), if any."""
    wanted = name.strip().casefold()
    for template in _load_templates():
        if template.name.casefold() == wanted:
            return template
    return None


def apply_template(topology: Topology, template_name: str) -> Topology:
    """Return ``topology`` with name, description and configuration of a template.

    The topology's id and timestamps are kept. An unknown template name
    returns ``topology`` unchanged.
    """
    template = get_template(template_name)
    if template is None:
        return topology
    return replace(
        topology,
        name=template.name,
        description=template.description,
        configuration=template.configuration,
    )
