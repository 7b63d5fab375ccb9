import pytest

from optconduit.core import (
    Capability,
    InvalidProblemError,
    KeyNotFoundError,
    OptConduitError,
    OutOfRangeError,
    SolverContractError,
    TypeMismatchError,
)


@pytest.mark.parametrize(
    "error, builtin",
    [
        (OutOfRangeError, IndexError),
        (InvalidProblemError, ValueError),
        (KeyNotFoundError, KeyError),
        (TypeMismatchError, TypeError),
        (SolverContractError, RuntimeError),
    ],
)
def test_errors_derive_from_root_and_builtin(error, builtin):
    assert issubclass(error, OptConduitError)
    assert issubclass(error, builtin)


def test_key_not_found_message_is_not_quoted():
    assert str(KeyNotFoundError("key k not found")) == "key k not found"


def test_capability_ordering():
    assert Capability.HESSIAN.satisfies(Capability.GRADIENT)
    assert Capability.GRADIENT.satisfies(Capability.GRADIENT)
    assert not Capability.VALUE.satisfies(Capability.GRADIENT)
