"""fluxgraph - Flux Kustomization dependency diagrams.

fluxgraph walks a directory of Kubernetes manifests, picks out Flux CD
Kustomization resources and renders their ``dependsOn`` relationships
as a Mermaid class diagram.

Core principles:
- Single pass: collect everything, then render once
- Lenient parsing: documents that do not decode are skipped, not reported
- Fail fast on I/O: an unreadable tree aborts the run with a non-zero exit
"""

__version__ = "0.1.0"
__author__ = "fluxgraph Contributors"
