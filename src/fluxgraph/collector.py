"""Kustomization discovery.

Walks a manifest tree, splits each YAML file into documents and keeps the
Flux Kustomizations among them, keyed by name (last one wins).

Documents that fail to decode are skipped without being reported; any
filesystem error aborts the whole collection.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import yaml

from fluxgraph.config import CollectorConfig
from fluxgraph.models import Kustomization
from fluxgraph.utils.logging import get_logger

_logger = get_logger(__name__)

# Literal separator used by the naive splitter
DOCUMENT_SEPARATOR = b"---"

# Plain scalars of these types stay as their source text
_TEXT_TAGS = {
    "tag:yaml.org,2002:bool",
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
}


class ManifestLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalar text verbatim and rejects duplicate keys.

    Only ``null`` is still resolved implicitly, so ``yes``, ``0755`` or
    ``1_000`` load as the strings written in the manifest.
    """

    def construct_mapping(self, node: yaml.Node, deep: bool = False) -> dict:
        if isinstance(node, yaml.MappingNode):
            seen: set[tuple[str, str]] = set()
            for key_node, _ in node.value:
                if not isinstance(key_node, yaml.ScalarNode):
                    continue
                if key_node.tag == "tag:yaml.org,2002:merge":
                    continue
                key = (key_node.tag, key_node.value)
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"mapping key {key_node.value!r} already defined",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


ManifestLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class CollectionError(Exception):
    """Raised when the manifest tree cannot be read."""

    def __init__(self, path: Path | str, message: str) -> None:
        self.path = Path(path)
        self.message = message
        super().__init__(f"{path}: {message}")


def split_fragments(content: bytes, mode: str = "naive") -> Iterator[object]:
    """Split raw file content into decoded YAML documents.

    In "naive" mode the content is cut at every literal ``---``, even one
    inside a scalar or comment, and each piece is loaded on its own. In
    "documents" mode a real multi-document load is used and a syntax error
    ends the file.

    Args:
        content: Raw file bytes
        mode: "naive" or "documents"

    Yields:
        One decoded object per document that loaded cleanly
    """
    if mode == "documents":
        try:
            yield from yaml.load_all(content, Loader=ManifestLoader)
        except yaml.YAMLError:
            return
        return

    for fragment in content.split(DOCUMENT_SEPARATOR):
        try:
            yield yaml.load(fragment, Loader=ManifestLoader)
        except yaml.YAMLError:
            continue


def parse_fragment(document: object) -> Kustomization | None:
    """Decode one YAML document, returning None if it has the wrong shape."""
    try:
        return Kustomization.from_dict(document)
    except ValueError:
        return None


class KustomizationCollector:
    """Collects Flux Kustomizations from a directory of manifests."""

    def __init__(self, config: CollectorConfig | None = None) -> None:
        """Initialize the collector.

        Args:
            config: Collector settings (defaults if None)
        """
        self.config = config or CollectorConfig()

    def collect(self, root: Path | str) -> dict[str, Kustomization]:
        """Collect every accepted Kustomization under root.

        Args:
            root: Directory to walk (a single file is also accepted)

        Returns:
            Mapping of metadata.name to Kustomization, last definition wins

        Raises:
            CollectionError: If any directory or file cannot be read
        """
        root = Path(root)
        kustomizations: dict[str, Kustomization] = {}
        files_scanned = 0

        for file_path in self._iter_manifest_files(root):
            files_scanned += 1
            _logger.debug(f"Scanning {file_path}")

            try:
                content = file_path.read_bytes()
            except OSError as e:
                raise CollectionError(file_path, e.strerror or str(e)) from e

            for document in split_fragments(content, self.config.split_mode):
                kustomization = parse_fragment(document)
                if kustomization is not None and self._accepts(kustomization):
                    if kustomization.name in kustomizations:
                        _logger.debug(
                            f"Overriding kustomization '{kustomization.name}' from {file_path}"
                        )
                    kustomizations[kustomization.name] = kustomization

        _logger.structured(
            logging.INFO,
            "Collected kustomizations",
            files=files_scanned,
            kustomizations=len(kustomizations),
        )
        return kustomizations

    def _accepts(self, kustomization: Kustomization) -> bool:
        return bool(kustomization.name) and kustomization.api_version.startswith(
            self.config.api_version_prefix
        )

    def _matches_suffix(self, file_name: str) -> bool:
        return file_name.endswith(tuple(self.config.suffixes))

    def _iter_manifest_files(self, root: Path) -> Iterator[Path]:
        """Yield matching files under root in sorted walk order.

        Raises:
            CollectionError: On the first unreadable directory
        """
        if root.is_file():
            if self._matches_suffix(root.name):
                yield root
            return

        yield from self._walk(root)

    def _walk(self, directory: Path) -> Iterator[Path]:
        # Files and subdirectories share one lexical order, so a/x.yaml
        # is visited before b.yaml. Symlinked directories are not followed.
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise CollectionError(e.filename or directory, e.strerror or str(e)) from e

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise CollectionError(entry.path, e.strerror or str(e)) from e

            if is_dir:
                yield from self._walk(Path(entry.path))
            elif self._matches_suffix(entry.name):
                yield Path(entry.path)


def collect_kustomizations(
    root: Path | str,
    config: CollectorConfig | None = None,
) -> dict[str, Kustomization]:
    """Collect Kustomizations from a manifest tree.

    Convenience function for KustomizationCollector.

    Args:
        root: Directory to walk
        config: Collector settings (defaults if None)

    Returns:
        Mapping of name to Kustomization
    """
    return KustomizationCollector(config).collect(root)
