from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from services.course_identifier import CourseIdentifier
from services.errors import UnmatchedBrace


class NodeKind(enum.Enum):
    AND = "&"
    OR = "|"
    COURSE = "C"


@dataclass(frozen=True)
class RequirementNode:
    kind: NodeKind
    course: Optional[CourseIdentifier] = None  # only set on COURSE leaves
    children: Tuple[int, ...] = ()  # indices into RequirementTree.nodes
    parent: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.COURSE


class RequirementTree:
    """
    Boolean AND/OR tree over course identifiers.

    Nodes live in a flat list (root at index 0) and refer to their children by
    index. Instances are only produced by TreeBuilder / from_rows and are not
    mutated afterwards.
    """

    ROOT = 0

    def __init__(self, nodes: Tuple[RequirementNode, ...]):
        self._nodes = nodes

    @classmethod
    def from_grammar(cls, text: str) -> "RequirementTree":
        """
        Build from the intermediate grammar, e.g. "({MATH 140}|{MATH 141})&{PHYS 211}".
        """
        return TreeBuilder().build(tokenize_grammar(text))

    @classmethod
    def from_rows(cls, rows) -> "RequirementTree":
        """
        Rebuild from pre-order (key, logic, parent_key, course) rows as the
        persistence layer stores them. The first row is the root.
        """
        builder = TreeBuilder()
        index_of = {}
        for key, logic, parent_key, course in rows:
            kind = NodeKind(logic)
            if parent_key is None:
                if index_of:
                    raise ValueError("Requirement rows contain more than one root")
                builder.set_kind(RequirementTree.ROOT, kind)
                index_of[key] = RequirementTree.ROOT
                continue
            parent = index_of[parent_key]
            if kind is NodeKind.COURSE:
                index_of[key] = builder.add_course(parent, course)
            else:
                index_of[key] = builder.add_group(parent, kind)
        return builder.freeze()

    @property
    def nodes(self) -> Tuple[RequirementNode, ...]:
        return self._nodes

    @property
    def root(self) -> RequirementNode:
        return self._nodes[self.ROOT]

    def __len__(self) -> int:
        return len(self._nodes)

    def children(self, index: int) -> List[RequirementNode]:
        return [self._nodes[i] for i in self._nodes[index].children]

    def walk(self) -> Iterator[Tuple[int, RequirementNode, int]]:
        """Pre-order traversal yielding (index, node, depth)."""
        stack = [(self.ROOT, 0)]
        while stack:
            index, depth = stack.pop()
            node = self._nodes[index]
            yield index, node, depth
            for child in reversed(node.children):
                stack.append((child, depth + 1))

    def courses(self) -> List[CourseIdentifier]:
        return [node.course for _, node, _ in self.walk() if node.is_leaf]

    def to_grammar(self) -> str:
        """
        Canonical intermediate-grammar rendering: every group in '(' ')' with
        its connective between children. Feeding it back to from_grammar gives
        an equivalent tree.
        """

        def render(index: int) -> str:
            node = self._nodes[index]
            if node.is_leaf:
                return "{%s}" % node.course
            inner = node.kind.value.join(render(i) for i in node.children)
            # groups default to AND, so a lone-child OR needs its connective spelled out
            if node.kind is NodeKind.OR and len(node.children) < 2:
                inner = "|" + inner
            return inner if index == self.ROOT else f"({inner})"

        return render(self.ROOT)

    def to_dict(self, index: int = ROOT) -> dict:
        node = self._nodes[index]
        if node.is_leaf:
            return {"course": str(node.course)}
        return {
            "logic": node.kind.name,
            "children": [self.to_dict(i) for i in node.children],
        }

    def __str__(self) -> str:
        return render_tree(self)

    def __repr__(self) -> str:
        return f"<RequirementTree {self.to_grammar()}>"

    def __eq__(self, other) -> bool:
        if not isinstance(other, RequirementTree):
            return NotImplemented
        return self._nodes == other._nodes


@dataclass
class _OpenNode:
    # Mutable while the builder runs; RequirementNode is the frozen form.
    kind: NodeKind
    course: Optional[CourseIdentifier] = None
    children: List[int] = field(default_factory=list)
    parent: Optional[int] = None


class TreeBuilder:
    """
    Stack-based builder for RequirementTree.

    Tokens are '(' '[' (open group), ')' ']' (close group), '|' '&' (set the
    connective of the innermost open group) and course text. The root is an
    implicit AND group that can't be closed. Only the group on top of the
    stack can have its connective rewritten; once closed it is frozen.
    """

    def __init__(self):
        self._nodes: List[_OpenNode] = [_OpenNode(NodeKind.AND)]
        self._stack: List[int] = [RequirementTree.ROOT]

    @property
    def top(self) -> int:
        return self._stack[-1]

    def add_group(self, parent: int, kind: NodeKind = NodeKind.AND) -> int:
        return self._append(parent, _OpenNode(kind))

    def add_course(self, parent: int, course: CourseIdentifier) -> int:
        return self._append(parent, _OpenNode(NodeKind.COURSE, course=course))

    def set_kind(self, index: int, kind: NodeKind) -> None:
        node = self._nodes[index]
        if node.kind is NodeKind.COURSE or kind is NodeKind.COURSE:
            raise ValueError("Only AND/OR groups have a connective")
        node.kind = kind

    def _append(self, parent: int, node: _OpenNode) -> int:
        node.parent = parent
        self._nodes.append(node)
        index = len(self._nodes) - 1
        self._nodes[parent].children.append(index)
        return index

    def feed(self, token: str) -> None:
        if token in ("(", "["):
            self._stack.append(self.add_group(self.top))
        elif token in (")", "]"):
            # catalog text sometimes drops an opening bracket; never pop the root
            if len(self._stack) > 1:
                self._stack.pop()
        elif token == "|":
            self.set_kind(self.top, NodeKind.OR)
        elif token == "&":
            self.set_kind(self.top, NodeKind.AND)
        else:
            self.add_course(self.top, CourseIdentifier.parse(token))

    def build(self, tokens) -> RequirementTree:
        for token in tokens:
            self.feed(token)
        return self.freeze()

    def freeze(self) -> RequirementTree:
        return RequirementTree(
            tuple(
                RequirementNode(
                    kind=n.kind,
                    course=n.course,
                    children=tuple(n.children),
                    parent=n.parent,
                )
                for n in self._nodes
            )
        )


def tokenize_grammar(text: str) -> List[str]:
    """
    Split the intermediate grammar into tokens.

    Course text is wrapped in '{}' so spacing survives; anything else outside
    braces that is not one of ( ) [ ] | & is ignored.
    """
    tokens: List[str] = []
    buffer: List[str] = []
    inside = False

    for ch in text:
        if inside:
            if ch == "}":
                tokens.append("".join(buffer).strip())
                buffer.clear()
                inside = False
            else:
                buffer.append(ch)
        elif ch == "{":
            inside = True
        elif ch == "}":
            raise UnmatchedBrace(f"Unmatched closing brace in {text!r}")
        elif ch in "|&()[]":
            tokens.append(ch)

    return tokens


def render_tree(tree: RequirementTree) -> str:
    """
    Human-readable rendering for display and audit.

    AND groups are wrapped in [], OR groups in (), but only when the group
    has a parent and at least two rendered children. That makes the output
    lossy: "{MATH 140}|{MATH 141}&{PHYS 121}" renders as
    "MATH 140 AND MATH 141 AND PHYS 121". Kept as-is for compatibility with
    existing rendered data.
    """

    def node_to_string(index: int) -> str:
        node = tree.nodes[index]
        if not node.children:
            return ""

        parts = []
        for child_index in node.children:
            child = tree.nodes[child_index]
            if child.is_leaf:
                parts.append(str(child.course))
            else:
                parts.append(node_to_string(child_index))
        parts = [p for p in parts if p.strip()]

        joiner = " AND " if node.kind is NodeKind.AND else " OR "
        joined = joiner.join(parts)
        if node.parent is None or len(parts) < 2:
            return joined
        if node.kind is NodeKind.AND:
            return f"[{joined}]"
        return f"({joined})"

    return node_to_string(RequirementTree.ROOT)


@dataclass
class DeviantFlags:
    empty_crosslist: bool = False
    # leftover text the grammar can't place, e.g. "FIFTH SEMESTER STANDING"
    unknown_requirement: bool = False


@dataclass
class CourseFlags:
    # Most courses need their prerequisites AND their concurrent courses;
    # a few accept either ("... OR CONCURRENT: ...").
    is_prerequisite_concurrent_separate: bool = False
    deviant: DeviantFlags = field(default_factory=DeviantFlags)

    def to_dict(self) -> dict:
        return {
            "is_prerequisite_concurrent_separate": self.is_prerequisite_concurrent_separate,
            "empty_crosslist": self.deviant.empty_crosslist,
            "unknown_requirement": self.deviant.unknown_requirement,
        }


class Mode(enum.Enum):
    PREREQUISITE = "prerequisites"
    CONCURRENT = "concurrent"
    COREQUISITE = "corequisites"
    RECOMMENDED = "recommended"


@dataclass
class RequirementSet:
    prerequisites: Optional[RequirementTree] = None
    concurrent: Optional[RequirementTree] = None
    corequisites: Optional[RequirementTree] = None
    recommended: Optional[RequirementTree] = None

    def get(self, mode: Mode) -> Optional[RequirementTree]:
        return getattr(self, mode.value)

    def set_once(self, mode: Mode, tree: RequirementTree) -> bool:
        # write-once: the first clause for a category is the canonical one
        if self.get(mode) is not None:
            return False
        setattr(self, mode.value, tree)
        return True

    def items(self) -> Iterator[Tuple[Mode, RequirementTree]]:
        for mode in Mode:
            tree = self.get(mode)
            if tree is not None:
                yield mode, tree

    def is_empty(self) -> bool:
        return not any(True for _ in self.items())

    def to_dict(self) -> dict:
        return requirements_payload(self.items())


def requirements_payload(items) -> dict:
    """(Mode, tree) pairs -> JSON-ready dict keyed by category."""
    return {
        mode.value: {
            "text": render_tree(tree),
            "grammar": tree.to_grammar(),
            "tree": tree.to_dict(),
        }
        for mode, tree in items
    }
