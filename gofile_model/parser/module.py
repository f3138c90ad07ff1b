"""
Module locator.

Finds the go.mod file owning a source file and derives the Module the
file belongs to.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ModuleResolutionError
from ..model.nodes import Module

logger = logging.getLogger(__name__)

GO_MOD_FILENAME = "go.mod"


def read_module_name(go_mod: Path) -> str:
    """Return the module path declared in a go.mod file, or "" if absent."""
    with open(go_mod, encoding="utf-8") as f:
        for line in f:
            line = line.rstrip("\r\n")
            if line.startswith("module "):
                return line[7:].strip().strip('"')
    return ""


def resolve_module(filename: str | Path) -> Module:
    """
    Locate the module of a Go source file.

    Searches go.mod in the directory of the file and its parents. The search
    stops at a directory named vendor since vendored packages belong to
    another module.

    Args:
        filename: Path of the Go source file

    Returns:
        Module with the declared name and the file's sub-directory inside it

    Raises:
        ModuleResolutionError: If no go.mod is found or it declares no module
    """
    base_dir = Path(filename).absolute().parent
    sub_dirs: list[str] = []

    while not (base_dir / GO_MOD_FILENAME).is_file():
        parent = base_dir.parent
        if parent == base_dir:
            raise ModuleResolutionError(f"unable to locate go.mod file for {filename}")
        if base_dir.name.lower() == "vendor":
            # We reached a vendor subdirectory, stop here
            raise ModuleResolutionError(f"unable to locate go.mod file for {filename}")
        sub_dirs.insert(0, base_dir.name)
        base_dir = parent

    go_mod = base_dir / GO_MOD_FILENAME
    module_name = read_module_name(go_mod)
    if not module_name:
        raise ModuleResolutionError(f"go module name not found in {go_mod}")

    module = Module(name=module_name, sub_dir="/".join(sub_dirs))
    logger.debug("Resolved module of %s to %s", filename, module.full_name)
    return module
