import logging
import re
import tomllib
from pathlib import Path
from typing import List, Optional

from ruleboard.diagram.schema import Graph
from ruleboard.errors import StorageReadError, ViewNotFound
from ruleboard.store.files import ROOT_VIEW_ID

logger = logging.getLogger(__name__)

UNKNOWN_STACK = "Unknown"
NO_ARCHITECTURE = "No architecture defined."

_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)")


def _requirement_name(requirement: str) -> Optional[str]:
    match = _REQUIREMENT_NAME.match(requirement)
    return match.group(1) if match else None


def read_tech_stack(manifest_path: Path) -> str:
    """
    Dependency names declared in the project's pyproject.toml, read fresh on
    every call. Runtime and optional dependency groups are both included.
    """
    try:
        manifest = tomllib.loads(Path(manifest_path).read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error("[Chat] Failed to read %s: %s", manifest_path, e)
        return UNKNOWN_STACK

    project = manifest.get("project", {})
    requirements: List[str] = list(project.get("dependencies", []))
    for group in project.get("optional-dependencies", {}).values():
        requirements.extend(group)

    names: List[str] = []
    for requirement in requirements:
        name = _requirement_name(requirement)
        if name and name not in names:
            names.append(name)

    return ", ".join(names) if names else UNKNOWN_STACK


def describe_component(node) -> str:
    data = node.data
    component_type = data.type.value if data.type else node.kind.value
    desc = f"{data.label} ({component_type})"
    if data.sub_label:
        desc += f" - {data.sub_label}"
    if data.details:
        desc += f" [{', '.join(data.details)}]"
    return desc


def summarize_architecture(graph: Optional[Graph]) -> str:
    """Group labels plus one line per component of the persisted root diagram."""
    if graph is None:
        return NO_ARCHITECTURE

    groups = [n.data.label or "Unnamed Group" for n in graph.nodes if n.is_group]
    components = [describe_component(n) for n in graph.nodes if not n.is_group]

    return (
        f"- Groups/Zones: {', '.join(groups)}\n"
        f"- Components: {', '.join(components)}"
    )


def load_root_graph(view_store) -> Optional[Graph]:
    """Persisted root diagram, or None when it was never saved or cannot be read."""
    try:
        return view_store.load(ROOT_VIEW_ID)
    except ViewNotFound:
        return None
    except StorageReadError:
        logger.error("[Chat] Root architecture unreadable, continuing without it")
        return None
