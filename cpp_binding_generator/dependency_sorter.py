"""
Ordering of struct declarations so every struct follows the structs it contains
"""

from dataclasses import dataclass, field

from .errors import CyclicDependencyError
from .metadata import TypeDef
from .type_classifier import Category, get_category, is_synthetic_nested


@dataclass
class _Node:
    edges: list[TypeDef] = field(default_factory=list)
    visiting: bool = False
    done: bool = False

    def add_edge(self, target: TypeDef):
        # Structs have few fields, a linear search is fine
        if target not in self.edges:
            self.edges.append(target)


def _value_dependencies(type_def: TypeDef):
    """Structs a type holds by value (pointer and enum fields do not constrain layout order)"""
    for struct_field in type_def.fields:
        signature = struct_field.signature
        if signature.ptr_count != 0 or signature.type_def is None:
            continue
        if get_category(signature.type_def) == Category.STRUCT:
            yield signature.type_def


class DependencySorter:
    """Directed graph of struct -> struct by-value dependencies

    Nodes are keyed by TypeDef identity and kept in insertion order, which breaks
    ties when no dependency constrains the order.
    """

    def __init__(self):
        self.nodes: dict[TypeDef, _Node] = {}

    def add(self, type_def: TypeDef):
        """Add a struct and, transitively, every struct it contains by value"""
        pending = [type_def]
        while pending:
            current = pending.pop(0)
            if current in self.nodes:
                continue
            node = self.nodes[current] = _Node()
            for target in _value_dependencies(current):
                node.add_edge(target)
                if target not in self.nodes:
                    pending.append(target)

    def _visit(self, start: TypeDef, ordered: list[TypeDef]):
        start_node = self.nodes[start]
        if start_node.done:
            return
        start_node.visiting = True
        stack = [(start, iter(start_node.edges))]
        while stack:
            current, edges = stack[-1]
            target = next(edges, None)
            if target is None:
                stack.pop()
                node = self.nodes[current]
                node.visiting = False
                node.done = True
                # Nested helper types are inlined into their parent
                if not is_synthetic_nested(current):
                    ordered.append(current)
                continue
            target_node = self.nodes[target]
            if target_node.done:
                continue
            if target_node.visiting:
                raise CyclicDependencyError(
                    f"Cyclic dependency graph encountered through '{target.full_name}'",
                    current.full_name,
                )
            target_node.visiting = True
            stack.append((target, iter(target_node.edges)))

    def sort(self) -> list[TypeDef]:
        """Return the structs in emission order"""
        ordered = []
        for type_def in list(self.nodes):
            self._visit(type_def, ordered)
        return ordered


def sort_structs(structs: list[TypeDef]) -> list[TypeDef]:
    """Dependency-order a list of structs, pulling in structs they contain by value"""
    sorter = DependencySorter()
    for type_def in structs:
        sorter.add(type_def)
    return sorter.sort()
