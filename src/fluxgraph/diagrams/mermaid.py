"""Mermaid class diagram generation for Kustomization dependencies.

Each Kustomization becomes a class block showing its name and namespace;
each ``dependsOn`` entry becomes a ``-->`` edge labelled "depends on".
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass

from fluxgraph.models import Kustomization

DIAGRAM_HEADER = "classDiagram"
EDGE_LABEL = "depends on"

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9]")


def sanitize_name(name: str) -> str:
    """Create a Mermaid-safe identifier from a resource name.

    Every character outside ``[A-Za-z0-9]`` becomes ``_``.

    Args:
        name: Raw resource name

    Returns:
        Sanitized identifier
    """
    return _UNSAFE_ID_CHARS.sub("_", name)


@dataclass
class ClassDiagram:
    """Rendered Mermaid class diagram.

    Attributes:
        mermaid: Diagram source text
        node_count: Number of class blocks
        edge_count: Number of dependency edges
    """

    mermaid: str
    node_count: int = 0
    edge_count: int = 0


class MermaidClassDiagramGenerator:
    """Renders a collection of Kustomizations as a Mermaid class diagram.

    Dependency targets are drawn whether or not they were collected, so
    edges may point at identifiers with no class block.
    """

    def __init__(self, sort_nodes: bool = True) -> None:
        """Initialize the generator.

        Args:
            sort_nodes: Emit class blocks ordered by name rather than in
                mapping order
        """
        self.sort_nodes = sort_nodes

    def generate(self, kustomizations: Mapping[str, Kustomization]) -> ClassDiagram:
        """Generate the class diagram.

        Args:
            kustomizations: Mapping of name to Kustomization

        Returns:
            ClassDiagram with Mermaid syntax and counts
        """
        lines = [DIAGRAM_HEADER]
        edge_count = 0

        for kustomization in self._ordered(kustomizations):
            safe_name = sanitize_name(kustomization.name)
            lines.extend(self._class_block(safe_name, kustomization))

            for dependency in kustomization.depends_on:
                lines.append(
                    f"    {safe_name} --> {sanitize_name(dependency.name)} : {EDGE_LABEL}"
                )
                edge_count += 1

        return ClassDiagram(
            mermaid="\n".join(lines) + "\n",
            node_count=len(kustomizations),
            edge_count=edge_count,
        )

    def _ordered(self, kustomizations: Mapping[str, Kustomization]) -> list[Kustomization]:
        if self.sort_nodes:
            return [kustomizations[name] for name in sorted(kustomizations)]
        return list(kustomizations.values())

    def _class_block(self, safe_name: str, kustomization: Kustomization) -> list[str]:
        # Display lines carry the raw, unsanitized values
        return [
            f"    class {safe_name} {{",
            f"        +string name {kustomization.name}",
            f"        +string namespace {kustomization.namespace}",
            "    }",
        ]


def render_class_diagram(
    kustomizations: Mapping[str, Kustomization],
    sort_nodes: bool = True,
) -> str:
    """Render Kustomizations as Mermaid class diagram text.

    Convenience function for diagram generation.

    Args:
        kustomizations: Mapping of name to Kustomization
        sort_nodes: Order class blocks by name

    Returns:
        Mermaid classDiagram source
    """
    return MermaidClassDiagramGenerator(sort_nodes=sort_nodes).generate(kustomizations).mermaid
