"""
Read-only views over jsii assembly manifests (``.jsii`` files).

Only the parts of the jsii schema the page renderer needs are modelled:
assemblies, classes with their initializer, interfaces with their
properties, enums, and type references.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class CdkDocsError(Exception):
    """Base class for errors raised while loading or resolving assemblies."""


class AssemblyLoadError(CdkDocsError):
    """A manifest could not be read or does not look like a jsii assembly."""


class TypeNotFoundError(CdkDocsError, KeyError):
    """No loaded assembly declares the requested fqn."""

    def __str__(self) -> str:
        return f"type not found: {self.args[0]}"


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass
class Docs:
    comment: str = ""
    default: str = ""

    @classmethod
    def from_spec(cls, spec: dict | None) -> Docs:
        spec = spec or {}
        # Older manifests carry a single "comment"; newer ones split it.
        comment = spec.get("comment") or "\n\n".join(
            part for part in (spec.get("summary"), spec.get("remarks")) if part
        )
        return cls(comment=comment, default=spec.get("default", ""))


@dataclass
class TypeReference:
    primitive: str | None = None
    fqn: str | None = None
    array_of_type: TypeReference | None = None
    map_of_type: TypeReference | None = None
    union_of_types: list[TypeReference] | None = None
    optional: bool = False

    @classmethod
    def from_spec(cls, spec: dict[str, Any], optional: bool = False) -> TypeReference:
        optional = optional or bool(spec.get("optional"))
        if "primitive" in spec:
            return cls(primitive=spec["primitive"], optional=optional)
        if "fqn" in spec:
            return cls(fqn=spec["fqn"], optional=optional)
        if "union" in spec:
            return cls(
                union_of_types=[cls.from_spec(t) for t in spec["union"]["types"]],
                optional=optional,
            )
        if "collection" in spec:
            collection = spec["collection"]
            element = cls.from_spec(collection["elementtype"])
            if collection["kind"] == "array":
                return cls(array_of_type=element, optional=optional)
            if collection["kind"] == "map":
                return cls(map_of_type=element, optional=optional)
            raise ValueError(f"unknown collection kind: {collection['kind']!r}")
        raise ValueError(f"unrecognised type reference: {spec!r}")


@dataclass
class Property:
    name: str
    type: TypeReference
    docs: Docs = field(default_factory=Docs)

    @classmethod
    def from_spec(cls, spec: dict[str, Any]) -> Property:
        return cls(
            name=spec["name"],
            type=TypeReference.from_spec(spec["type"], optional=bool(spec.get("optional"))),
            docs=Docs.from_spec(spec.get("docs")),
        )


@dataclass
class Parameter:
    name: str
    type: TypeReference

    @classmethod
    def from_spec(cls, spec: dict[str, Any]) -> Parameter:
        return cls(
            name=spec["name"],
            type=TypeReference.from_spec(spec["type"], optional=bool(spec.get("optional"))),
        )


@dataclass
class Initializer:
    parameters: list[Parameter] = field(default_factory=list)


@dataclass
class ClassType:
    fqn: str
    name: str
    assembly: Assembly = field(repr=False, compare=False)
    docs: Docs = field(default_factory=Docs)
    initializer: Initializer | None = None

    @property
    def is_resource(self) -> bool:
        """True when the initializer follows the (scope, id, props) shape."""
        if self.initializer is None or len(self.initializer.parameters) < 3:
            return False
        fqn = self.initializer.parameters[2].type.fqn
        if fqn is None:
            return False
        try:
            found = self.assembly.find_type(fqn)
        except TypeNotFoundError:
            return False
        return isinstance(found, InterfaceType)


@dataclass
class InterfaceType:
    fqn: str
    name: str
    assembly: Assembly = field(repr=False, compare=False)
    docs: Docs = field(default_factory=Docs)
    properties: list[Property] = field(default_factory=list)
    interfaces: list[str] = field(default_factory=list)

    def get_properties(self, inherited: bool = False) -> list[Property]:
        """Return own properties, plus those of all base interfaces if asked."""
        collected: dict[str, Property] = {}
        if inherited:
            for base_fqn in self.interfaces:
                base = self.assembly.find_type(base_fqn)
                for prop in base.get_properties(inherited=True):
                    collected[prop.name] = prop
        for prop in self.properties:
            collected[prop.name] = prop
        return list(collected.values())


@dataclass
class EnumType:
    fqn: str
    name: str
    assembly: Assembly = field(repr=False, compare=False)
    docs: Docs = field(default_factory=Docs)
    members: list[str] = field(default_factory=list)


@dataclass
class Readme:
    markdown: str


@dataclass
class Assembly:
    name: str
    version: str = ""
    readme: Readme | None = None
    dependencies: dict[str, str] = field(default_factory=dict)
    types: dict[str, ClassType | InterfaceType | EnumType] = field(default_factory=dict)
    system: TypeSystem | None = field(default=None, repr=False, compare=False)

    @property
    def classes(self) -> list[ClassType]:
        return [t for t in self.types.values() if isinstance(t, ClassType)]

    @property
    def interfaces(self) -> list[InterfaceType]:
        return [t for t in self.types.values() if isinstance(t, InterfaceType)]

    @property
    def enums(self) -> list[EnumType]:
        return [t for t in self.types.values() if isinstance(t, EnumType)]

    def find_type(self, fqn: str) -> ClassType | InterfaceType | EnumType:
        """Resolve ``fqn`` through the owning type system, or locally."""
        if self.system is not None:
            return self.system.find_type(fqn)
        try:
            return self.types[fqn]
        except KeyError:
            raise TypeNotFoundError(fqn) from None

    def assembly_name_of(self, fqn: str) -> str:
        if self.system is not None:
            return self.system.assembly_name_of(fqn)
        if fqn in self.types:
            return self.name
        return _infer_assembly_name(fqn, [self.name, *self.dependencies])

    @classmethod
    def from_manifest(cls, manifest: dict[str, Any]) -> Assembly:
        readme = manifest.get("readme") or {}
        asm = cls(
            name=manifest["name"],
            version=manifest.get("version", ""),
            readme=Readme(readme["markdown"]) if readme.get("markdown") else None,
            dependencies=dict(manifest.get("dependencies") or {}),
        )
        for fqn, spec in manifest["types"].items():
            kind = spec.get("kind")
            if kind == "class":
                init = spec.get("initializer")
                asm.types[fqn] = ClassType(
                    fqn=fqn,
                    name=spec["name"],
                    assembly=asm,
                    docs=Docs.from_spec(spec.get("docs")),
                    initializer=Initializer(
                        [Parameter.from_spec(p) for p in init.get("parameters", [])]
                    ) if init is not None else None,
                )
            elif kind == "interface":
                asm.types[fqn] = InterfaceType(
                    fqn=fqn,
                    name=spec["name"],
                    assembly=asm,
                    docs=Docs.from_spec(spec.get("docs")),
                    properties=[Property.from_spec(p) for p in spec.get("properties", [])],
                    interfaces=list(spec.get("interfaces", [])),
                )
            elif kind == "enum":
                asm.types[fqn] = EnumType(
                    fqn=fqn,
                    name=spec["name"],
                    assembly=asm,
                    docs=Docs.from_spec(spec.get("docs")),
                    members=[m["name"] for m in spec.get("members", [])],
                )
        return asm


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_manifest(path: Path) -> dict[str, Any]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise AssemblyLoadError(f"cannot read {path}: {exc}") from exc
    try:
        manifest = json.loads(text)
    except json.JSONDecodeError as exc:
        raise AssemblyLoadError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(manifest, dict) or "name" not in manifest or "types" not in manifest:
        raise AssemblyLoadError(f"{path} is not a jsii assembly (missing name/types)")
    return manifest


class TypeSystem:
    """A set of loaded assemblies that can resolve fqns across each other."""

    def __init__(self) -> None:
        self.assemblies: dict[str, Assembly] = {}

    def add_assembly(self, assembly: Assembly) -> Assembly:
        assembly.system = self
        self.assemblies[assembly.name] = assembly
        return assembly

    def load(self, path: Path) -> Assembly:
        manifest = load_manifest(path)
        try:
            assembly = Assembly.from_manifest(manifest)
        except (KeyError, ValueError, TypeError, AttributeError) as exc:
            raise AssemblyLoadError(f"{path}: unsupported manifest shape: {exc!r}") from exc
        return self.add_assembly(assembly)

    def find_type(self, fqn: str) -> ClassType | InterfaceType | EnumType:
        for assembly in self.assemblies.values():
            if fqn in assembly.types:
                return assembly.types[fqn]
        raise TypeNotFoundError(fqn)

    def assembly_name_of(self, fqn: str) -> str:
        """Name of the assembly declaring ``fqn``, inferred if not loaded."""
        for assembly in self.assemblies.values():
            if fqn in assembly.types:
                return assembly.name
        known = list(self.assemblies)
        for assembly in self.assemblies.values():
            known.extend(assembly.dependencies)
        return _infer_assembly_name(fqn, known)


def _infer_assembly_name(fqn: str, known: list[str]) -> str:
    candidates = [name for name in known if fqn.startswith(name + ".")]
    if candidates:
        return max(candidates, key=len)
    return fqn.rsplit(".", 1)[0]


def simple_name(fqn: str) -> str:
    return fqn.rsplit(".", 1)[-1]


def load_assembly(path: Path, system: TypeSystem | None = None) -> Assembly:
    """Load a single manifest, into ``system`` if given."""
    return (system or TypeSystem()).load(path)
