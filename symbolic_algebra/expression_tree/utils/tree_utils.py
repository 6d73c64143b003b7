"""
Tree Utility Functions

Tree traversal and analysis helpers shared by the expression wrapper and the
validator. Every helper only reads the tree.
"""

from typing import Dict, List
from collections import Counter

from ..core.node import Node, ConstantNode, VariableNode, OperatorNode
from ..core.operators import OPERATOR_MAP


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
    """Breadth-first traversal (iterative, non-recursive)"""
    nodes_to_visit = [node]
    all_nodes = []

    while nodes_to_visit:
        current_node = nodes_to_visit.pop(0)  # FIFO for breadth-first
        all_nodes.append(current_node)
        nodes_to_visit.extend(current_node.children)

    return all_nodes


def _depth_first_traversal(node: Node) -> List[Node]:
    """Depth-first pre-order traversal (recursive)"""
    nodes = [node]
    for child in node.children:
        nodes.extend(_depth_first_traversal(child))
    return nodes


def calculate_tree_depth(node: Node) -> int:
    """
    Calculate the maximum depth of the tree.

    Args:
        node: Root node of the tree

    Returns:
        Maximum depth (leaf nodes and childless operators have depth 1)
    """
    if not node.children:
        return 1
    return 1 + max(calculate_tree_depth(child) for child in node.children)


def find_nodes_by_operator(node: Node, operator: str) -> List[OperatorNode]:
    """Find all operator nodes whose token is ``operator``."""
    if operator not in OPERATOR_MAP:
        raise ValueError(f"Unknown operator: {operator}")
    op_type = OPERATOR_MAP[operator]
    return [n for n in get_all_nodes(node)
            if isinstance(n, OperatorNode) and n.op_type == op_type]


def get_constants(node: Node) -> List[ConstantNode]:
    """Get all constant nodes in the tree, in depth-first order."""
    return [n for n in get_all_nodes(node, 'depth_first') if isinstance(n, ConstantNode)]


def get_variables(node: Node) -> List[str]:
    """Get the distinct variable names used in the tree, sorted."""
    return sorted({n.name for n in get_all_nodes(node) if isinstance(n, VariableNode)})


def get_variable_usage_counts(node: Node) -> Dict[str, int]:
    """Count how many times each variable is referenced."""
    return dict(Counter(n.name for n in get_all_nodes(node) if isinstance(n, VariableNode)))
