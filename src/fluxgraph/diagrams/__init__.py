"""Diagram renderers for collected Kustomizations."""

from fluxgraph.diagrams.mermaid import (
    ClassDiagram,
    MermaidClassDiagramGenerator,
    render_class_diagram,
    sanitize_name,
)

__all__ = [
    "ClassDiagram",
    "MermaidClassDiagramGenerator",
    "render_class_diagram",
    "sanitize_name",
]
