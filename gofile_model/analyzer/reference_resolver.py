"""
Reference resolver for non-native type references.

Binds every NonNativeType of a batch of compilation units to the
declaration it names, following import aliases and relative import
paths across files, packages and modules.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..model.nodes import (
    ArrayType,
    ChannelType,
    CompilationUnit,
    Declaration,
    Field,
    FunctionType,
    InterfaceType,
    MapType,
    Module,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeShape,
)

logger = logging.getLogger(__name__)

# Import path meaning "the importing module itself"
SELF_IMPORT_PATH = "."


@dataclass
class ResolverStats:
    """Counters of a resolution run."""

    resolved: int = 0  # References bound during this run
    already_resolved: int = 0  # References found bound from a previous run
    unresolved: list[str] = field(default_factory=list)  # Names left unbound


class ReferenceResolver:
    """Resolves NonNativeType references of a batch of compilation units."""

    def __init__(self, units: list[CompilationUnit]):
        """
        Initialize the resolver and build the module index.

        The index must be complete before any reference is resolved, a
        reference may target a unit that comes later in the batch.

        Args:
            units: All compilation units of the batch, order defines precedence
        """
        self.units = units
        self.modules_map: dict[str, list[CompilationUnit]] = {}
        self.stats = ResolverStats()
        self._build_index()

    def _build_index(self) -> None:
        """Group units by module full name, keeping batch order."""
        for unit in self.units:
            self.modules_map.setdefault(unit.module.full_name, []).append(unit)

    def resolve_all(self) -> ResolverStats:
        """
        Resolve every reference of every declaration.

        Returns:
            Counters of the run
        """
        self.stats = ResolverStats()
        for unit in self.units:
            for declaration in unit.declarations:
                self.resolve(declaration.type, unit)

        logger.info(
            "Resolved %d references (%d already bound, %d unresolved)",
            self.stats.resolved,
            self.stats.already_resolved,
            len(self.stats.unresolved),
        )
        return self.stats

    def resolve(self, typ: TypeShape | None, unit: CompilationUnit) -> None:
        """
        Walk a type shape and resolve every reference found in it.

        Args:
            typ: The type shape to walk (None for unsupported map keys/values)
            unit: The unit the type belongs to

        Raises:
            TypeError: If typ is not a known type shape
        """
        if typ is None or isinstance(typ, NativeType):
            return
        if isinstance(typ, NonNativeType):
            self._resolve_non_native(typ, unit)
        elif isinstance(typ, StructType):
            self._resolve_fields(typ.fields, unit)
        elif isinstance(typ, InterfaceType):
            self._resolve_fields(typ.methods, unit)
        elif isinstance(typ, ArrayType):
            self.resolve(typ.value_type, unit)
        elif isinstance(typ, MapType):
            self.resolve(typ.key_type, unit)
            self.resolve(typ.value_type, unit)
        elif isinstance(typ, PointerType):
            self.resolve(typ.to_type, unit)
        elif isinstance(typ, ChannelType):
            self.resolve(typ.value_type, unit)
        elif isinstance(typ, FunctionType):
            self._resolve_fields(typ.type_params, unit)
            self._resolve_fields(typ.params, unit)
            self._resolve_fields(typ.results, unit)
        else:
            raise TypeError(f"Unknown type shape {type(typ).__name__}")

    def _resolve_fields(self, fields: list[Field], unit: CompilationUnit) -> None:
        for fld in fields:
            self.resolve(fld.type, unit)

    def _resolve_non_native(self, ref_type: NonNativeType, unit: CompilationUnit) -> None:
        if ref_type.ref is not None:
            self.stats.already_resolved += 1
            return

        target = self.find_target(ref_type.name, unit)
        if target is None:
            logger.debug("Unresolved reference %s in %s", ref_type.name, unit.filename or unit.module.full_name)
            self.stats.unresolved.append(ref_type.name)
            return

        ref_type.ref = target
        self.stats.resolved += 1

    def find_target(self, name: str, unit: CompilationUnit) -> Declaration | None:
        """
        Find the declaration a (possibly qualified) name refers to from a unit.

        Args:
            name: Referenced name, e.g. "Name" or "pkg.Name"
            unit: The unit containing the reference

        Returns:
            The first matching declaration, or None
        """
        module_name = unit.module.full_name
        obj_name = name

        dot_idx = name.find(".")
        if dot_idx >= 0:
            package_alias = name[:dot_idx]
            obj_name = name[dot_idx + 1 :]

            imp = unit.get_import(package_alias)
            if imp is None or not imp.path:
                return None

            if imp.path != SELF_IMPORT_PATH:
                if imp.path.startswith("."):
                    module_name = self.normalize_relative_import(unit.module, imp.path)
                    if module_name is None:
                        return None
                else:
                    module_name = imp.path

        return self.lookup(module_name, obj_name)

    @staticmethod
    def normalize_relative_import(module: Module, import_path: str) -> str | None:
        """
        Compute the module full name a relative import path points to.

        Examples:
            Module("m", "a/b"), "../c" -> "m/a/c"
            Module("m", "a"), "../../x" -> None

        Args:
            module: Module of the importing unit
            import_path: Import path starting with "."

        Returns:
            The target module full name, or None if the path escapes the module root
        """
        temp_path = import_path
        if module.sub_dir:
            temp_path = f"{module.sub_dir}/{temp_path}"

        fragments: list[str] = []
        for fragment in temp_path.split("/"):
            if fragment == ".":
                continue
            if fragment == "..":
                if not fragments:
                    return None
                fragments.pop()
            else:
                fragments.append(fragment)

        if fragments:
            return f"{module.name}/{'/'.join(fragments)}"
        return module.name

    def lookup(self, module_full_name: str, name: str) -> Declaration | None:
        """Get the first declaration named name in a module, in batch order."""
        for unit in self.modules_map.get(module_full_name, []):
            for declaration in unit.declarations:
                if declaration.name == name:
                    return declaration
        return None


def resolve_references(units: list[CompilationUnit]) -> ResolverStats:
    """Resolve all NonNativeType references of a batch of compilation units."""
    return ReferenceResolver(units).resolve_all()
