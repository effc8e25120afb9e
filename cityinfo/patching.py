"""
CityInfo API - Partial Update Documents
========================================

What:  Applies a JSON Patch (RFC 6902) document to a flat resource
       representation such as PointOfInterestForUpdate.
Why:   PATCH /api/cities/{cityId}/pointsofinterest/{id} lets clients change
       one field without resending the other.
How:   The representation is dumped to a dict keyed by its wire names, the
       operations are applied in order to a copy, and the caller validates
       the result by loading it back into the Pydantic model.

Semantics for a flat, fixed-shape document:
    - A path addresses one top-level member ("/name"). Member names
      match case-insensitively ("/Name" is "/name"). Unknown members and
      nested paths are rejected; the document's shape never changes.
    - add and replace both set the member.
    - remove resets the member to null.
    - move copies "from" into "path" and resets "from" to null.
    - test fails the whole document when the member differs from "value".
    The first failing operation aborts the patch; nothing is applied.
"""

import copy
from typing import Any, Dict, Iterable, Optional

from cityinfo.exceptions import ValidationError
from cityinfo.schemas.point_of_interest import PatchOperation

PATCH_ERROR_KEY = "patch"


def _member_from_pointer(pointer: Optional[str], document: Dict[str, Any]) -> str:
    """Resolve a JSON pointer to a top-level member name of `document`."""
    if pointer is None:
        raise ValidationError.for_field(PATCH_ERROR_KEY, "A 'from' location is required for this operation.")
    if not pointer.startswith("/") or pointer.count("/") != 1:
        raise ValidationError.for_field(
            PATCH_ERROR_KEY,
            f"The path '{pointer}' is not a valid location in this document.",
        )
    # RFC 6901 escapes: ~1 is '/', ~0 is '~' (order matters)
    segment = pointer[1:].replace("~1", "/").replace("~0", "~")
    if segment in document:
        return segment
    # Member names match case-insensitively: "/Name" addresses "name"
    for member in document:
        if member.lower() == segment.lower():
            return member
    raise ValidationError.for_field(
        PATCH_ERROR_KEY,
        f"The target location specified by path segment '{segment}' was not found.",
    )


def _require_value(operation: PatchOperation) -> Any:
    if "value" not in operation.model_fields_set:
        raise ValidationError.for_field(
            PATCH_ERROR_KEY,
            f"The '{operation.op}' operation at '{operation.path}' requires a value.",
        )
    return operation.value


def apply_patch(document: Dict[str, Any], operations: Iterable[PatchOperation]) -> Dict[str, Any]:
    """
    Apply `operations` to a copy of `document` and return the copy.

    Raises:
        ValidationError: malformed or unknown path, missing value, or a
            failing test operation. The input document is left untouched.
    """
    patched = copy.deepcopy(document)

    for operation in operations:
        member = _member_from_pointer(operation.path, patched)

        if operation.op in ("add", "replace"):
            patched[member] = _require_value(operation)

        elif operation.op == "remove":
            patched[member] = None

        elif operation.op == "move":
            source = _member_from_pointer(operation.from_, patched)
            if source != member:
                patched[member] = patched[source]
                patched[source] = None

        elif operation.op == "copy":
            source = _member_from_pointer(operation.from_, patched)
            patched[member] = copy.deepcopy(patched[source])

        elif operation.op == "test":
            expected = _require_value(operation)
            if patched[member] != expected:
                raise ValidationError.for_field(
                    PATCH_ERROR_KEY,
                    f"The current value '{patched[member]}' at path '{member}' "
                    f"is not equal to the test value '{expected}'.",
                )

    return patched
