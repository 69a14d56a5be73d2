"""Core data models shared across packagebuilder components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

NAMESPACE_SEPARATOR = "\\"
MANIFEST_STEM = "package"

HolderKey = Tuple[str, Optional[str]]


def manifest_filename(extension: str) -> str:
    """Return the manifest file name written into each namespace directory."""
    return f"{MANIFEST_STEM}.{extension.lstrip('.')}"


@dataclass
class ClassHolder:
    """Types declared under one namespace inside one directory."""

    path: str
    namespace: Optional[str] = None
    classes: Dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> HolderKey:
        return (self.path, self.namespace)

    def add_class(self, name: str, file_path: str) -> None:
        """Record ``name`` as declared in ``file_path``; a repeated name keeps its slot."""
        self.classes[name] = file_path

    def is_empty(self) -> bool:
        return not self.classes

    def qualified_name(self, name: str) -> str:
        if not self.namespace:
            return name
        return f"{self.namespace}{NAMESPACE_SEPARATOR}{name}"


class ClassHolderContainer:
    """Ordered collection of holders, one per (directory, namespace) pair."""

    def __init__(self) -> None:
        self._holders: Dict[HolderKey, ClassHolder] = {}

    def get(self, path: str, namespace: Optional[str]) -> Optional[ClassHolder]:
        return self._holders.get((path, namespace))

    def get_or_create(self, path: str, namespace: Optional[str]) -> ClassHolder:
        key = (path, namespace)
        holder = self._holders.get(key)
        if holder is None:
            holder = ClassHolder(path=path, namespace=namespace)
            self._holders[key] = holder
        return holder

    def holders(self) -> List[ClassHolder]:
        return list(self._holders.values())

    def is_empty(self) -> bool:
        return not self._holders

    def __iter__(self) -> Iterator[ClassHolder]:
        return iter(list(self._holders.values()))

    def __len__(self) -> int:
        return len(self._holders)


class PackageContainer:
    """Namespace to manifest path mapping produced by a writer run."""

    def __init__(self) -> None:
        self._packages: Dict[Optional[str], str] = {}

    def add_package_file(self, namespace: Optional[str], path: str) -> None:
        self._packages[namespace] = path

    def sort_packages(self) -> "PackageContainer":
        """Order entries by namespace; the root namespace (``None``) sorts first."""
        ordered = sorted(
            self._packages.items(),
            key=lambda item: (item[0] is not None, item[0] or ""),
        )
        self._packages = dict(ordered)
        return self

    def raw_data(self) -> Dict[Optional[str], str]:
        return dict(self._packages)

    def is_empty(self) -> bool:
        return not self._packages

    def __iter__(self) -> Iterator[Tuple[Optional[str], str]]:
        return iter(list(self._packages.items()))

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._packages


__all__ = [
    "ClassHolder",
    "ClassHolderContainer",
    "HolderKey",
    "MANIFEST_STEM",
    "NAMESPACE_SEPARATOR",
    "PackageContainer",
    "manifest_filename",
]
