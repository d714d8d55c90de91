"""
Tree Utility Functions

Traversal and inspection helpers for expression trees. Every helper walks
``Node.children()`` so it covers all node types without a per-type branch.
"""

from typing import List, Set

from ..core.node import Node
from ..core.operators import NodeType
from ..core.symbol import Symbol


def get_all_nodes(node: Node, traversal_order: str = 'breadth_first') -> List[Node]:
    """
    Get all nodes in the tree using specified traversal order.

    Args:
        node: Root node of the tree
        traversal_order: 'breadth_first' (default) or 'depth_first'

    Returns:
        List of all nodes in the tree
    """
    if traversal_order == 'breadth_first':
        return _breadth_first_traversal(node)
    elif traversal_order == 'depth_first':
        return _depth_first_traversal(node)
    else:
        raise ValueError(f"Invalid traversal_order: {traversal_order}")


def _breadth_first_traversal(node: Node) -> List[Node]:
    nodes_to_visit = [node]
    all_nodes = []
    index = 0

    while index < len(nodes_to_visit):
        current_node = nodes_to_visit[index]
        index += 1
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children())

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    nodes = [node]
    for child in node.children():
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes have depth 1)
    """
    return 1 + max((calculate_tree_depth(child) for child in node.children()), default=0)


def get_variables(node: Node) -> Set[Symbol]:
    """Symbols referenced anywhere in the tree"""
    return {n.symbol for n in get_all_nodes(node) if n.node_type == NodeType.VARIABLE}


def validate_tree_structure(node: Node) -> bool:
    """
    Check that a tree is well formed.

    Every child must be a Node and every Add/Mul must have at least one
    operand. Trees built through the constructors always pass; this is for
    trees assembled by hand from the node classes.
    """
    if not isinstance(node, Node):
        return False
    if node.node_type in (NodeType.ADD, NodeType.MUL) and not node.operands:
        return False
    return all(validate_tree_structure(child) for child in node.children())
