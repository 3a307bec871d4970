import itertools

import pytest

from password import InvalidLength, InvalidSymbol, Password, PasswordChar
from solver import SolverConfig, solve

def passwords(pattern, max_solutions=None):
    return solve(SolverConfig(pattern=pattern, max_solutions=max_solutions)).passwords

def test_solve_fixed():
    assert passwords("ふ") == [Password.parse("ふ")]
    assert passwords("おにのばか") == [Password.parse("おにのばか")]
    assert passwords("あ") == []

def test_solve_wildcard():
    sols = passwords("おにのば?")
    assert Password.parse("おにのばか") in sols
    assert all(sol.is_valid() for sol in sols)
    assert sols == sorted(sols)

def test_solve_matches_brute_force():
    expected = []
    for pc1, pc2 in itertools.product(PasswordChar.all(), PasswordChar.all()):
        password = Password.new([PasswordChar.KA, pc1, pc2])
        if password.is_valid():
            expected.append(password)

    sol = solve(SolverConfig(pattern="か??"))
    assert sol.passwords == expected
    assert sol.count == len(expected)

def test_solve_invalid_second_char():
    assert passwords("?あ") == []
    assert passwords("?あ??") == []

    for sol in passwords("あ??"):
        assert not Password.is_invalid_second_char(sol[1])

def test_solve_max_solutions():
    sols = passwords("お???", max_solutions=3)
    assert len(sols) == 3
    assert all(sol.is_valid() for sol in sols)

def test_solve_bad_pattern():
    with pytest.raises(InvalidLength):
        passwords("")
    with pytest.raises(InvalidSymbol):
        passwords("お?x")
