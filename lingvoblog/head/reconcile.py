"""Diff a desired head state against the current one and apply the result.

``diff`` is pure: it only reads the snapshot it is given and returns a
``HeadPatch``. ``apply_patch`` is the single place where a document is
mutated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from lingvoblog.head.document import HeadElement

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from lingvoblog.head.document import HeadDocument


class ReconcilePolicy(StrEnum):
    # Create missing elements, never touch existing ones.
    INSERT_ONLY = "insert_only"
    # Create missing elements, overwrite changed ones, never remove.
    UPSERT = "upsert"
    # Upsert, then remove the owner's elements that are no longer desired.
    REPLACE = "replace"


class OpKind(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


class HeadOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: OpKind
    key: str
    element: HeadElement | None = None


class HeadPatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    ops: tuple[HeadOp, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.ops

    def keys(self, kind: OpKind) -> list[str]:
        return [op.key for op in self.ops if op.kind == kind]


def diff(
    current: Mapping[str, HeadElement],
    desired: Iterable[HeadElement],
    policy: ReconcilePolicy,
    owner: str | None = None,
) -> HeadPatch:
    """Compute the operations that turn ``current`` into ``desired``.

    When ``desired`` repeats a key, the last element wins. Removal (REPLACE
    only) is limited to elements carrying ``owner``.
    """
    wanted: dict[str, HeadElement] = {}
    for element in desired:
        wanted[element.key] = element

    ops: list[HeadOp] = []
    for key, element in wanted.items():
        existing = current.get(key)
        if existing is None:
            ops.append(HeadOp(kind=OpKind.CREATE, key=key, element=element))
        elif policy != ReconcilePolicy.INSERT_ONLY and existing != element:
            ops.append(HeadOp(kind=OpKind.UPDATE, key=key, element=element))

    if policy == ReconcilePolicy.REPLACE:
        if owner is None:
            raise ValueError("REPLACE reconciliation needs an owner")
        ops.extend(
            HeadOp(kind=OpKind.REMOVE, key=key)
            for key, element in current.items()
            if element.owner == owner and key not in wanted
        )

    return HeadPatch(ops=tuple(ops))


def apply_patch(document: HeadDocument, patch: HeadPatch) -> None:
    for op in patch.ops:
        if op.kind == OpKind.REMOVE:
            document.remove(op.key)
        elif op.kind == OpKind.CREATE:
            assert op.element is not None
            document.insert(op.element)
        else:
            assert op.element is not None
            document.replace(op.element)


def reconcile(
    document: HeadDocument,
    desired: Iterable[HeadElement],
    policy: ReconcilePolicy,
    owner: str | None = None,
) -> HeadPatch:
    """Diff ``desired`` against ``document`` and apply the patch."""
    patch = diff(document.snapshot(), desired, policy, owner)
    apply_patch(document, patch)
    return patch
