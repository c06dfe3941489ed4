"""Tree of joints and the recursive passes that run over it."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator
from typing import Optional

from rigidsim.algorithms import (
    apply_external_update,
    loop_1_update,
    loop_2_update,
    loop_3_update,
)
from rigidsim.joint import Joint

OutwardFn = Callable[[Joint, Joint], None]
InwardFn = Callable[[Joint, Optional[Joint]], None]


class MultiBody:
    """A forest of joints rooted at one or more bases."""

    def __init__(self) -> None:
        self.joints: dict[int, Joint] = {}
        self._children: dict[int, list[int]] = {}
        self._bases: list[int] = []
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self.joints)

    def __getitem__(self, joint_id: int) -> Joint:
        return self.joints[joint_id]

    def __iter__(self) -> Iterator[int]:
        return iter(self.joints)

    def _register(self, joint: Joint) -> int:
        joint_id = next(self._ids)
        self.joints[joint_id] = joint
        self._children[joint_id] = []
        return joint_id

    def add_base(self, joint: Joint) -> int:
        """Add a root joint and return its identifier."""
        joint_id = self._register(joint)
        self._bases.append(joint_id)
        return joint_id

    def add_joint(self, joint: Joint, parent: int) -> int:
        """Attach a joint below ``parent`` and return its identifier."""
        if parent not in self.joints:
            raise KeyError(f"unknown parent joint {parent!r}")
        joint_id = self._register(joint)
        self._children[parent].append(joint_id)
        return joint_id

    def children(self, joint_id: int) -> list[int]:
        """Identifiers of the joints attached directly below ``joint_id``."""
        if joint_id not in self._children:
            raise KeyError(f"unknown joint {joint_id!r}")
        return list(self._children[joint_id])

    def base_loop(
        self, fn_out: Optional[OutwardFn] = None, fn_in: Optional[InwardFn] = None
    ) -> None:
        """Visit every non-base joint depth first.

        ``fn_out`` runs on the way out (parent before child) and ``fn_in`` on
        the way back (child before parent); both get ``(joint, parent)``.
        """
        for base_id in self._bases:
            for child_id in self._children[base_id]:
                self._visit(base_id, child_id, fn_out, fn_in)

    def _visit(self, parent_id, joint_id, fn_out, fn_in) -> None:
        joint, parent = self.joints[joint_id], self.joints[parent_id]
        if fn_out is not None:
            fn_out(joint, parent)
        for child_id in self._children[joint_id]:
            self._visit(joint_id, child_id, fn_out, fn_in)
        if fn_in is not None:
            fn_in(joint, parent)

    def loop_1(self) -> None:
        self.base_loop(loop_1_update, None)

    def apply_external_forces(self) -> None:
        self.base_loop(apply_external_update, None)

    def loop_23(self) -> None:
        self.base_loop(None, loop_2_update)
        self.base_loop(loop_3_update, None)