import pytest

from arithcalc.evaluator import Evaluator, construct_evaluator, evaluate


@pytest.mark.parametrize(
    "code, expected_ret_val",
    [
        pytest.param("1", 1.0),
        pytest.param("-1", -1.0),
        pytest.param("+1", 1.0),
        pytest.param("1+2", 3.0),
        pytest.param("(1+2)", 3.0),
        pytest.param("-(1+2)", -3.0),
        pytest.param("(((1)))", 1.0),
        pytest.param("3+4*2", 11.0),
        pytest.param("1 * 4 + 5", 9.0),
        pytest.param("1 + 4 * 5", 21.0),
        pytest.param("10 - 4 - 3", 3.0),
        pytest.param("10 / 5 / 2 / 2", 0.5),
        pytest.param("10 + 2 * (5 + 3 - 1)", 24.0),
        pytest.param("  7\t*\t6  ", 42.0),
        pytest.param("2.5 * 4", 10.0),
        pytest.param(".5 + 1.", 1.5),
        # modulo keeps the sign of the dividend
        pytest.param("7 % 3", 1.0),
        pytest.param("-7 % 3", -1.0),
        pytest.param("7 % -3", 1.0),
        pytest.param("7.5 % 2", 1.5),
        pytest.param("2 * 7 % 4", 2.0),
        # power
        pytest.param("2^10", 1024.0),
        pytest.param("2^3^2", 512.0),
        pytest.param("(2^3)^2", 64.0),
        pytest.param("2^-1", 0.5),
        pytest.param("2 * 3^2", 18.0),
        pytest.param("-3 * -2", 6.0),
        pytest.param("8 / -2", -4.0),
    ],
)
def test_eval_arithmetic(code: str, expected_ret_val: float) -> None:
    assert Evaluator().evaluate(code) == expected_ret_val


def test_unary_sign_binds_before_power() -> None:
    evaluator = Evaluator()
    assert evaluator.evaluate("-2^2") == 4.0
    assert evaluator.evaluate("-(2^2)") == -4.0
    assert evaluator.evaluate("0-2^2") == -4.0


@pytest.mark.parametrize(
    "lines, expected_ret_val, expected_variables",
    [
        pytest.param(["A=1", "A"], 1.0, {"A": 1.0}),
        pytest.param(["A=1", "B=2", "A+B"], 3.0, {"A": 1.0, "B": 2.0}),
        pytest.param(["A=1", "B=2", "C=A+B"], 3.0, {"A": 1.0, "B": 2.0, "C": 3.0}),
        pytest.param(["A=B=5"], 5.0, {"A": 5.0, "B": 5.0}),
        pytest.param(["A=B=5", "A+1"], 6.0, {"A": 5.0, "B": 5.0}),
        pytest.param(["x = 3", "X * 2"], 6.0, {"X": 3.0}),
        pytest.param(["(A=5)+A"], 10.0, {"A": 5.0}),
        pytest.param(["A=(B=2)*3"], 6.0, {"A": 6.0, "B": 2.0}),
        pytest.param(["2*(C=4)"], 8.0, {"C": 4.0}),
        pytest.param(["A=2", "A=A*A", "A"], 4.0, {"A": 4.0}),
        pytest.param(["Z"], 0.0, {}),
        pytest.param(["A = -3", "-A"], 3.0, {"A": -3.0}),
    ],
)
def test_eval_with_variables(lines: list[str], expected_ret_val: float, expected_variables: dict[str, float]) -> None:
    evaluator = construct_evaluator()
    results = [evaluate(evaluator, line) for line in lines]
    assert results[-1] == expected_ret_val
    assert evaluator.variables.assigned() == expected_variables


def test_evaluators_do_not_share_variables() -> None:
    first = construct_evaluator()
    second = construct_evaluator()
    first.evaluate("A=42")
    assert second.evaluate("A") == 0.0
    assert first.evaluate("A") == 42.0


@pytest.mark.parametrize("code", ["3+4*2", "2^3^2", "(1+2)*(3-4)/5", "A+B*2", "7 % 4"])
def test_side_effect_free_evaluation_is_idempotent(code: str) -> None:
    evaluator = Evaluator()
    evaluator.evaluate("A=1.5")
    evaluator.evaluate("B=-2")
    assert evaluator.evaluate(code) == evaluator.evaluate(code)


def test_arithmetic_only_evaluator() -> None:
    evaluator = Evaluator(allow_variables=False)
    assert evaluator.variables is None
    assert evaluator.evaluate("1 + 2 * (3 - 1) ^ 2") == 9.0
