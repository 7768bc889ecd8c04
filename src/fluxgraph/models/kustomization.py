"""Kustomization entity decoded from a Flux CD manifest.

Only a handful of fields drive the diagram (name, namespace, dependsOn).
The remaining spec fields are decoded so that documents with the wrong
shape are rejected instead of silently half-parsed.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any


def _as_str(value: Any, key: str) -> str:
    """Coerce a YAML scalar to its text form.

    Raises:
        ValueError: If the value is a mapping or sequence
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float, date)):
        return str(value)
    raise ValueError(f"Expected scalar for '{key}', got {type(value).__name__}")


_TRUE_TEXT = {"true", "yes", "y", "on"}
_FALSE_TEXT = {"false", "no", "n", "off"}


def _as_bool(value: Any, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    # Manifests are loaded with scalars kept as text
    if isinstance(value, str):
        if value.lower() in _TRUE_TEXT:
            return True
        if value.lower() in _FALSE_TEXT:
            return False
    raise ValueError(f"Expected boolean for '{key}', got {type(value).__name__}")


def _as_mapping(value: Any, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return value
    raise ValueError(f"Expected mapping for '{key}', got {type(value).__name__}")


def _as_sequence(value: Any, key: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    raise ValueError(f"Expected sequence for '{key}', got {type(value).__name__}")


@dataclass(frozen=True)
class SourceReference:
    """Reference to the Flux source (GitRepository, OCIRepository, ...).

    Attributes:
        kind: Source kind
        name: Source name
    """

    kind: str = ""
    name: str = ""


@dataclass(frozen=True)
class DependencyReference:
    """Single ``spec.dependsOn`` entry.

    The target name is not checked against the collected resources.
    """

    name: str = ""


@dataclass(frozen=True)
class Kustomization:
    """A Flux CD Kustomization resource.

    Attributes:
        api_version: Resource apiVersion (e.g. kustomize.toolkit.fluxcd.io/v1)
        name: metadata.name, unique key within a collection
        namespace: metadata.namespace, display only
        depends_on: Declared dependencies in manifest order
        interval: spec.interval
        service_account_name: spec.serviceAccountName
        source_ref: spec.sourceRef
        path: spec.path
        prune: spec.prune
    """

    api_version: str = ""
    name: str = ""
    namespace: str = ""
    depends_on: tuple[DependencyReference, ...] = field(default_factory=tuple)
    interval: str = ""
    service_account_name: str = ""
    source_ref: SourceReference = field(default_factory=SourceReference)
    path: str = ""
    prune: bool = False

    @property
    def dependency_names(self) -> list[str]:
        """Names of declared dependencies, in order."""
        return [dep.name for dep in self.depends_on]

    @classmethod
    def from_dict(cls, data: Any) -> "Kustomization":
        """Decode a single YAML document into a Kustomization.

        An empty document decodes to an empty record. Unknown keys are
        ignored; known keys with the wrong shape are rejected.

        Args:
            data: Object produced by a YAML loader

        Returns:
            Kustomization instance

        Raises:
            ValueError: If the document does not have the expected shape
        """
        document = _as_mapping(data, "document")
        metadata = _as_mapping(document.get("metadata"), "metadata")
        spec = _as_mapping(document.get("spec"), "spec")
        source_ref = _as_mapping(spec.get("sourceRef"), "spec.sourceRef")

        depends_on = []
        for entry in _as_sequence(spec.get("dependsOn"), "spec.dependsOn"):
            entry = _as_mapping(entry, "spec.dependsOn[]")
            depends_on.append(
                DependencyReference(name=_as_str(entry.get("name"), "spec.dependsOn[].name"))
            )

        return cls(
            api_version=_as_str(document.get("apiVersion"), "apiVersion"),
            name=_as_str(metadata.get("name"), "metadata.name"),
            namespace=_as_str(metadata.get("namespace"), "metadata.namespace"),
            depends_on=tuple(depends_on),
            interval=_as_str(spec.get("interval"), "spec.interval"),
            service_account_name=_as_str(
                spec.get("serviceAccountName"), "spec.serviceAccountName"
            ),
            source_ref=SourceReference(
                kind=_as_str(source_ref.get("kind"), "spec.sourceRef.kind"),
                name=_as_str(source_ref.get("name"), "spec.sourceRef.name"),
            ),
            path=_as_str(spec.get("path"), "spec.path"),
            prune=_as_bool(spec.get("prune"), "spec.prune"),
        )
