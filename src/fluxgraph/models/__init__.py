"""fluxgraph data models.

- Kustomization: Flux CD Kustomization resource
- DependencyReference: Single dependsOn entry
- SourceReference: spec.sourceRef of a Kustomization
"""

from fluxgraph.models.kustomization import (
    DependencyReference,
    Kustomization,
    SourceReference,
)

__all__ = [
    "Kustomization",
    "DependencyReference",
    "SourceReference",
]
