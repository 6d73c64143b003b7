import numpy as np
from typing import Optional
from ..core.node import Node, ConstantNode, OperatorNode, VariableNode
from ..core.operators import accepts_operand_count


class ExpressionValidator:

  @staticmethod
  def is_valid_expression(node: Node, X: Optional[np.ndarray] = None) -> bool:
    if not ExpressionValidator._is_structurally_valid(node):
      return False

    if X is not None:
      return ExpressionValidator._test_evaluation(node, X)

    return True

  @staticmethod
  def _is_structurally_valid(node: Node) -> bool:
    if isinstance(node, ConstantNode):
        return bool(np.isfinite(node.value))

    elif isinstance(node, VariableNode):
        return True

    elif isinstance(node, OperatorNode):
        if not accepts_operand_count(node.op_type, len(node.children)):
            return False
        return all(ExpressionValidator._is_structurally_valid(child) for child in node.children)

    return False

  @staticmethod
  def _test_evaluation(node: Node, X: np.ndarray) -> bool:
    """Check the tree evaluates to finite values on every (x, y, z) row of X."""
    X = np.ascontiguousarray(X, dtype=np.float64)
    with np.errstate(all='ignore'):
      result = node.evaluate_batch(X)
    return bool(np.all(np.isfinite(result)))
