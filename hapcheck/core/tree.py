"""Merge classification result paths into one presentation tree.

Every path step becomes two nested nodes: an annotation node named
``<haplogroup>_Polys`` listing the step's polymorphisms, wrapping a branch
node named ``<haplogroup>``. Paths sharing a prefix of haplogroups share
those nodes and branch at the first differing step.

The serialized form is::

    {"id": "root", "name": "sample", "data": {"type": "hg"}, "children": [...]}
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from hapcheck.core.phylo import Polymorphism, RankedResult, SearchResultTreeNode
from hapcheck.errors import MalformedPathError

logger = logging.getLogger(__name__)

ROOT_ID = "root"
ROOT_NAME = "sample"
POLYS_SUFFIX = "_Polys"

# Display size hints for annotation nodes
POLY_ROW_HEIGHT = 13
POLY_NODE_PADDING = 10
POLY_NODE_WIDTH = 50

# Polymorphism display states
STATE_FOUND = "found"
STATE_HETERO = "hetero"
STATE_CORRECTED = "corrected"
STATE_NOT_FOUND = "notfound"
STATE_NOT_IN_RANGE = "notInRange"


@dataclass
class PolyState:
    """A polymorphism label and its display state."""

    name: str
    state: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "state": self.state}


@dataclass
class NodeData:
    """Display payload of a tree node.

    Attributes:
        type: 'hg' for branch nodes, 'poly' for annotation nodes
        polys: Polymorphism states (annotation nodes only)
        height: Display height hint (annotation nodes only)
        width: Display width hint (annotation nodes only)
    """

    type: str
    polys: List[PolyState] = field(default_factory=list)
    height: Optional[int] = None
    width: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.type == "poly":
            data["polys"] = [p.to_dict() for p in self.polys]
            data["height"] = self.height
            data["width"] = self.width
        return data


@dataclass
class TreeNode:
    """A node of the presentation tree. Owns its children."""

    id: str
    name: str
    data: NodeData
    children: List["TreeNode"] = field(default_factory=list)

    def find_child(self, name: str) -> Optional["TreeNode"]:
        """Return the first child called ``name``, or None."""
        for child in self.children:
            if child.name == name:
                return child
        return None

    def iter_leaves(self) -> Iterator["TreeNode"]:
        """Yield leaf nodes depth-first, left to right."""
        if not self.children:
            yield self
            return
        for child in self.children:
            yield from child.iter_leaves()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the nested JSON-ready form."""
        return {
            "id": self.id,
            "name": self.name,
            "data": self.data.to_dict(),
            "children": [child.to_dict() for child in self.children],
        }


class PathTreeMerger:
    """Combine result paths into one rooted tree.

    Each merge builds a fresh tree; the merger keeps no state between calls.
    """

    def merge(
        self,
        paths: Sequence[Sequence[SearchResultTreeNode]],
        top_result: Optional[RankedResult] = None,
    ) -> Optional[TreeNode]:
        """Merge paths into one tree.

        Args:
            paths: Root-to-result paths, one per selected candidate
            top_result: Best ranked result; its corrected back mutations
                mark expected polymorphisms as 'corrected'

        Returns:
            Root TreeNode, or None if there are no paths

        Raises:
            MalformedPathError: If a path step has no haplogroup name
        """
        if not paths:
            logger.debug("No paths selected, no tree to build")
            return None

        corrected: FrozenSet[Polymorphism] = frozenset()
        if top_result is not None:
            corrected = frozenset(top_result.detailed_result.corrected_backmutations)

        root = TreeNode(id=ROOT_ID, name=ROOT_NAME, data=NodeData(type="hg"))
        for path in paths:
            node, cursor = self._descend(root, path)
            self._extend(node, path[cursor:], corrected)

        return root

    def _descend(
        self, root: TreeNode, path: Sequence[SearchResultTreeNode]
    ) -> Tuple[TreeNode, int]:
        """Walk the existing tree along the path's haplogroups.

        Returns:
            The deepest matched node and the number of path steps matched
        """
        node = root
        cursor = 0
        i = 0
        while i < len(node.children) and cursor < len(path):
            child = node.children[i]
            name = _step_name(path[cursor])
            if child.name == name + POLYS_SUFFIX:
                node = child
                i = 0
            elif child.name == name:
                logger.debug("Sharing existing branch %s", name)
                node = child
                i = 0
                cursor += 1
            else:
                i += 1
        return node, cursor

    def _extend(
        self,
        node: TreeNode,
        steps: Sequence[SearchResultTreeNode],
        corrected: FrozenSet[Polymorphism],
    ) -> None:
        """Append a chain of annotation/branch node pairs below ``node``."""
        for step in steps:
            name = _step_name(step)
            polys = self._poly_states(step, corrected)
            poly_count = len(step.expected_polys) + len(step.not_in_range_polys)

            poly_node = TreeNode(
                id=name + POLYS_SUFFIX,
                name=name + POLYS_SUFFIX,
                data=NodeData(
                    type="poly",
                    polys=polys,
                    height=poly_count * POLY_ROW_HEIGHT + POLY_NODE_PADDING,
                    width=POLY_NODE_WIDTH,
                ),
            )
            branch_node = TreeNode(id=name, name=name, data=NodeData(type="hg"))
            poly_node.children.append(branch_node)
            node.children.append(poly_node)
            node = branch_node

    @staticmethod
    def _poly_states(
        step: SearchResultTreeNode, corrected: FrozenSet[Polymorphism]
    ) -> List[PolyState]:
        found = set(step.found_polys)
        states = []
        for poly in step.expected_polys:
            if poly in found:
                state = STATE_FOUND
            elif poly.is_heteroplasmy:
                state = STATE_HETERO
            elif poly in corrected:
                state = STATE_CORRECTED
            else:
                state = STATE_NOT_FOUND
            states.append(PolyState(str(poly), state))

        for poly in step.not_in_range_polys:
            states.append(PolyState(str(poly), STATE_NOT_IN_RANGE))
        return states


def _step_name(step: SearchResultTreeNode) -> str:
    name = str(step.haplogroup) if step.haplogroup is not None else ""
    if not name:
        raise MalformedPathError("Path step has no haplogroup name")
    return name
