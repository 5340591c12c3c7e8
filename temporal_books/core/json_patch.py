"""
JSON Patch Engine.

Bidirectional translation between whole-object edits and RFC 6902 JSON
Patch documents.

    make_patch(original, modified)  -> list of operations
    apply_patch(patch, target)      -> patched target

Both sides are handled through their camelCase JSON projection. Null and
missing attributes are the same thing: both are dropped before comparing.
Arrays are compared as a whole; any difference replaces the whole array.

Usage:
    from temporal_books.core.json_patch import apply_patch, make_patch

    operations = make_patch(Book(entity_id="e1"), book)
    patched = apply_patch(operations, current_book)
"""

import copy
import json
from collections.abc import Iterable, Mapping
from typing import Any

import jsonpatch
import jsonpointer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from temporal_books.core.exceptions import PatchConflictError, ValidationError

OPERATIONS = frozenset({"add", "remove", "replace", "move", "copy", "test"})
_NEEDS_VALUE = frozenset({"add", "replace", "test"})
_NEEDS_FROM = frozenset({"move", "copy"})


# =============================================================================
# Projection
# =============================================================================


def _strip_nulls(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {
            key: _strip_nulls(item)
            for key, item in value.items()
            if item is not None
        }
    return value


def project(value: BaseModel | Mapping[str, Any] | None) -> dict[str, Any]:
    """Return the JSON object projection of a record or mapping."""
    if value is None:
        return {}
    if isinstance(value, BaseModel):
        if hasattr(value, "to_document"):
            return value.to_document()
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return _strip_nulls(value)


def _escape(key: str) -> str:
    """Escape a member name as an RFC 6901 reference token."""
    return key.replace("~", "~0").replace("/", "~1")


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _serialize(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), default=str)


# =============================================================================
# Diff
# =============================================================================


def make_patch(
    original: BaseModel | Mapping[str, Any] | None,
    modified: BaseModel | Mapping[str, Any] | None,
) -> list[dict[str, Any]]:
    """
    Compute the JSON Patch turning original into modified.

    At every object level, removes come first, then adds, then replaces
    (or nested changes), each group in key order of its side.
    """
    operations: list[dict[str, Any]] = []
    _diff_objects(project(original), project(modified), "/", operations)
    return operations


def _diff_objects(
    original: Mapping[str, Any],
    modified: Mapping[str, Any],
    path: str,
    operations: list[dict[str, Any]],
) -> None:
    for key in original:
        if key not in modified:
            operations.append({"op": "remove", "path": path + _escape(key)})

    for key in modified:
        if key not in original:
            operations.append({
                "op": "add",
                "path": path + _escape(key),
                "value": copy.deepcopy(modified[key]),
            })

    for key in original:
        if key not in modified:
            continue
        before, after = original[key], modified[key]
        member_path = path + _escape(key)

        if _json_type(before) != _json_type(after):
            operations.append({
                "op": "replace",
                "path": member_path,
                "value": copy.deepcopy(after),
            })
        elif _serialize(before) != _serialize(after):
            if isinstance(before, Mapping):
                _diff_objects(before, after, member_path + "/", operations)
            else:
                operations.append({
                    "op": "replace",
                    "path": member_path,
                    "value": copy.deepcopy(after),
                })


# =============================================================================
# Apply
# =============================================================================


def normalize_patch(patch: Iterable[Any] | None) -> list[dict[str, Any]]:
    """
    Validate a patch document and return it as a list of plain dicts.

    Accepts dicts or pydantic models (dumped by alias, unset members left out).

    Raises:
        ValidationError: If the patch is missing or an operation is malformed
    """
    if patch is None:
        raise ValidationError("Patch document is required")
    if isinstance(patch, (str, bytes, Mapping)):
        raise ValidationError("Patch document must be an array of operations")

    operations = []
    for index, raw in enumerate(patch):
        if isinstance(raw, BaseModel):
            raw = raw.model_dump(by_alias=True, exclude_unset=True)
        if not isinstance(raw, Mapping):
            raise ValidationError(
                "Patch operation must be an object",
                details={"index": index},
            )
        operation = dict(raw)
        op = operation.get("op")
        path = operation.get("path")

        if op not in OPERATIONS:
            raise ValidationError(
                f"Unknown patch operation: {op!r}",
                details={"index": index},
            )
        if not isinstance(path, str) or (path and not path.startswith("/")):
            raise ValidationError(
                "Patch operation path must be a JSON pointer",
                details={"index": index, "path": path},
            )
        if op in _NEEDS_VALUE and "value" not in operation:
            raise ValidationError(
                f"Patch operation '{op}' requires a value",
                details={"index": index},
            )
        if op in _NEEDS_FROM:
            source = operation.get("from")
            if not isinstance(source, str) or (source and not source.startswith("/")):
                raise ValidationError(
                    f"Patch operation '{op}' requires a 'from' pointer",
                    details={"index": index},
                )
        operations.append(operation)

    return operations


def _unknown_members(
    document: Mapping[str, Any],
    known: Mapping[str, Any],
    path: str = "/",
) -> list[str]:
    """Pointers to non-null members of document that the record does not keep."""
    unknown = []
    for key, value in document.items():
        if value is None:
            continue
        pointer = path + _escape(key)
        if key not in known:
            unknown.append(pointer)
        elif isinstance(value, Mapping) and isinstance(known[key], Mapping):
            unknown.extend(_unknown_members(value, known[key], pointer + "/"))
    return unknown


def apply_patch(patch: Iterable[Any], target: Any) -> Any:
    """
    Apply a JSON Patch document.

    A mapping target is mutated in place and returned. A pydantic target is
    projected, patched, and validated back into a new instance of its type.
    The patch is all-or-nothing: on failure the target is left unchanged.

    Raises:
        ValidationError: If the patch is malformed, or the result is not valid
            or carries attributes the record does not define
        PatchConflictError: If a test fails or a path cannot be resolved
    """
    operations = normalize_patch(patch)
    document = project(target) if isinstance(target, BaseModel) else target

    try:
        result = jsonpatch.JsonPatch(operations).apply(copy.deepcopy(document))
    except jsonpatch.InvalidJsonPatch as e:
        raise ValidationError(f"Malformed patch: {e}") from e
    except jsonpatch.JsonPatchTestFailed as e:
        raise PatchConflictError(f"Patch test failed: {e}") from e
    except (jsonpatch.JsonPatchConflict, jsonpointer.JsonPointerException) as e:
        raise PatchConflictError(f"Patch does not apply: {e}") from e

    if isinstance(target, BaseModel):
        try:
            patched = type(target).model_validate(result)
        except PydanticValidationError as e:
            raise ValidationError(
                "Patched document is not valid",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e
        unknown = _unknown_members(result, project(patched))
        if unknown:
            raise ValidationError(
                "Patched document has unknown attributes",
                details={"unknown_members": unknown},
            )
        return patched

    if not isinstance(result, dict):
        raise ValidationError("Patched document must remain an object")
    target.clear()
    target.update(result)
    return target
