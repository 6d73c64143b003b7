"""Utilities for expression trees."""

from .validator import ExpressionValidator
from .tree_utils import (
    get_all_nodes, calculate_tree_depth, find_nodes_by_operator,
    get_constants, get_variables, get_variable_usage_counts
)

__all__ = [
    'ExpressionValidator',
    'get_all_nodes', 'calculate_tree_depth', 'find_nodes_by_operator',
    'get_constants', 'get_variables', 'get_variable_usage_counts'
]
