"""
Type lookup by dotted path.

``"App.Blog.Controller"`` resolves to attribute ``Controller`` of module
``App.Blog`` when it exists, otherwise to class ``Controller`` inside module
``App.Blog.Controller`` (one class per file).
"""

import importlib
import inspect
from types import ModuleType
from typing import Optional, Type, Union

from mvcgem.exceptions import TypeNotFoundError

TypeRef = Union[str, Type]


def _collapse_class_file(type_id: str) -> str:
    """``pkg.Name.Name`` (class Name in module pkg.Name) is keyed as ``pkg.Name``."""
    head, _, last = type_id.rpartition(".")
    if head and head.rpartition(".")[2] == last:
        return head
    return type_id


def type_id_of(type_ref: TypeRef) -> str:
    """Canonical string id of a class or dotted path."""
    if isinstance(type_ref, str):
        return _collapse_class_file(type_ref.lstrip("."))
    if inspect.isclass(type_ref):
        return _collapse_class_file(f"{type_ref.__module__}.{type_ref.__qualname__}")
    raise TypeError(f"Expected a class or a dotted path, got {type_ref!r}")


def _import_optional(module_path: str) -> Optional[ModuleType]:
    """Import a module, None when that exact module (or a parent) is missing."""
    try:
        return importlib.import_module(module_path)
    except ModuleNotFoundError as e:
        # a missing dependency *inside* an existing module is not ours to hide
        if e.name and (module_path == e.name or module_path.startswith(e.name + ".")):
            return None
        raise


def locate_type(type_ref: TypeRef) -> Type:
    """Return the class a type reference points to."""
    if inspect.isclass(type_ref):
        return type_ref

    type_id = type_id_of(type_ref)
    module_path, _, attr = type_id.rpartition(".")
    if not module_path or not attr:
        raise TypeNotFoundError(f"Type [{type_id}] is not a dotted path")

    target = None
    module = _import_optional(module_path)
    if module is not None:
        target = getattr(module, attr, None)

    if target is None or inspect.ismodule(target):
        submodule = _import_optional(type_id)
        if submodule is not None:
            target = getattr(submodule, attr, None)

    if not inspect.isclass(target):
        raise TypeNotFoundError(f"Type [{type_id}] not found")
    return target
