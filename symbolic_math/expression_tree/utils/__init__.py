"""Transformations and helpers for expression trees."""

from .display import to_string, degree, add_term_key, mul_factor_key
from .simplifier import ExpressionSimplifier, simplify
from .expander import expand
from .evaluator import evaluate, evaluate_batch
from .sympy_utils import to_sympy, from_sympy
from .tree_utils import get_all_nodes, calculate_tree_depth, get_variables, validate_tree_structure

__all__ = [
    'to_string', 'degree', 'add_term_key', 'mul_factor_key',
    'ExpressionSimplifier', 'simplify', 'expand',
    'evaluate', 'evaluate_batch',
    'to_sympy', 'from_sympy',
    'get_all_nodes', 'calculate_tree_depth', 'get_variables', 'validate_tree_structure'
]
