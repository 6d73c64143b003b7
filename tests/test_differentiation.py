import numpy as np
import pytest
import sympy as sp

from symbolic_algebra import ConstantNode, VariableNode, OpType, parse_prefix, differentiate

SYMBOLS = sp.symbols('x y z')


def sample_points(n=25, low=-2.0, high=2.0, seed=42):
  rng = np.random.default_rng(seed)
  return rng.uniform(low, high, size=(n, 3))


def evaluate_at(node, points):
  return node.evaluate(points[:, 0], points[:, 1], points[:, 2])


def test_constant_derivative_is_zero():
  derivative = ConstantNode(42).diff('x')
  assert derivative == ConstantNode(0)
  points = sample_points()
  assert np.all(evaluate_at(derivative, points) == 0)


def test_variable_derivative():
  assert VariableNode('x').diff('x') == ConstantNode(1)
  assert VariableNode('y').diff('x') == ConstantNode(0)
  assert VariableNode('z').diff('y').evaluate(10, 20, 30) == 0


def test_unknown_variable_is_rejected():
  with pytest.raises(ValueError):
    parse_prefix("(+ x 1)").diff('w')


def test_product_rule_structure_and_value():
  tree = parse_prefix("(* x x)")
  derivative = tree.diff('x')
  assert derivative.prefix() == "(+ (* x 1) (* 1 x))"
  for v in (-3.0, 0.0, 1.5, 7.0):
    assert derivative.evaluate(v, 0, 0) == pytest.approx(2 * v)


def test_product_rule_reuses_original_operands():
  tree = parse_prefix("(* (+ x y) z)")
  derivative = tree.diff('x')
  left_term, right_term = derivative.children
  assert left_term.children[0] is tree.children[0]
  assert right_term.children[1] is tree.children[1]


def test_quotient_rule():
  derivative = parse_prefix("(/ x 2)").diff('x')
  assert derivative.prefix() == "(/ (- (* 1 2) (* x 0)) (* 2 2))"
  points = sample_points()
  np.testing.assert_allclose(evaluate_at(derivative, points), 0.5)


def test_sum_and_difference_linearity():
  f = "(* x (sumexp y x))"
  g = "(/ x (+ (* y y) 1))"
  points = sample_points()
  for op in ('+', '-'):
    combined = parse_prefix(f"({op} {f} {g})").diff('x')
    d_f = parse_prefix(f).diff('x')
    d_g = parse_prefix(g).diff('x')
    expected = evaluate_at(d_f, points) + (1 if op == '+' else -1) * evaluate_at(d_g, points)
    np.testing.assert_allclose(evaluate_at(combined, points), expected, rtol=1e-12)


def test_negate_rule():
  derivative = parse_prefix("(negate (* 3 y))").diff('y')
  assert derivative.op_type == OpType.NEG
  assert derivative.evaluate(0, 5, 0) == pytest.approx(-3)


def test_distance_derivative():
  tree = parse_prefix("(distance2 x y)")
  derivative = tree.diff('x')
  assert derivative.evaluate(3, 4, 0) == pytest.approx(0.6)
  # divides by twice the original, undifferentiated node
  assert derivative.children[1].children[1] is tree


def test_sumsq_derivative():
  derivative = parse_prefix("(sumsq3 x (* x y) z)").diff('x')
  assert derivative.prefix().startswith("(* 2 (+ (+ (* x 1)")
  # 2x + 2xy^2
  assert derivative.evaluate(1.5, 2, 7) == pytest.approx(2 * 1.5 + 2 * 1.5 * 4)


def test_sumexp_without_operands_has_zero_derivative():
  assert parse_prefix("(sumexp)").diff('x') == ConstantNode(0)


def test_lse_derivative_is_softmax_weight():
  derivative = parse_prefix("(lse x y z)").diff('y')
  x, y, z = 0.5, -1.0, 2.0
  expected = np.exp(y) / (np.exp(x) + np.exp(y) + np.exp(z))
  assert derivative.evaluate(x, y, z) == pytest.approx(expected)


def test_differentiation_does_not_modify_the_tree():
  tree = parse_prefix("(/ (distance3 x y z) (lse x (* y z)))")
  before = tree.prefix()
  tree.diff('x')
  tree.diff('z')
  assert tree.prefix() == before


@pytest.mark.parametrize("text", [
  "(* (- x 1) (- x 1))",
  "(/ (sumsq2 x y) (+ z 3))",
  "(negate (* x (- y z)))",
  "(lse x (* y 2) z)",
  "(sumexp (* x y) (/ z 4) 1)",
  "(distance3 x y (sumexp x z))",
  "(sumsq4 x y z 1)",
  "(distance5 (+ x 1) y z 2 (* x z))",
])
@pytest.mark.parametrize("variable", ['x', 'y', 'z'])
def test_derivative_matches_sympy(text, variable):
  tree = parse_prefix(text)
  derivative = differentiate(tree, variable)
  reference = sp.lambdify(SYMBOLS, sp.diff(tree.to_sympy(), sp.Symbol(variable)), modules='numpy')
  points = sample_points(low=0.5, high=1.5)
  expected = np.broadcast_to(reference(points[:, 0], points[:, 1], points[:, 2]), (len(points),))
  np.testing.assert_allclose(evaluate_at(derivative, points), expected, rtol=1e-9, atol=1e-12)
