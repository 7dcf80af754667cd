from types import MappingProxyType

import pytest

from solutionlab.classifier import DEFAULT_SATURATION, SATURATION_TABLE, classify, saturation_threshold
from solutionlab.models import Classification, SoluteKind

SOLUTES = [SoluteKind.SALT, SoluteKind.SUGAR, SoluteKind.ALCOHOL]


@pytest.mark.parametrize("solute", SOLUTES)
def test_zero_concentration_is_no_solute(solute: SoluteKind) -> None:
    assert classify(solute, 0) is Classification.NO_SOLUTE


@pytest.mark.parametrize("concentration", [0, 3, 50, 100])
def test_missing_solute_is_no_solute(concentration: float) -> None:
    assert classify(SoluteKind.NONE, concentration) is Classification.NO_SOLUTE
    assert classify(None, concentration) is Classification.NO_SOLUTE


@pytest.mark.parametrize("solute", SOLUTES)
def test_diluted_below_five_for_every_solute(solute: SoluteKind) -> None:
    for concentration in (0.5, 1, 4, 4.99):
        assert classify(solute, concentration) is Classification.DILUTED


def test_salt_boundaries() -> None:
    assert classify(SoluteKind.SALT, 5) is Classification.CONCENTRATED
    assert classify(SoluteKind.SALT, 35) is Classification.CONCENTRATED
    assert classify(SoluteKind.SALT, 36) is Classification.SATURATED
    assert classify(SoluteKind.SALT, 80) is Classification.SATURATED


def test_sugar_and_alcohol_boundaries() -> None:
    assert classify(SoluteKind.SUGAR, 64.9) is Classification.CONCENTRATED
    assert classify(SoluteKind.SUGAR, 65) is Classification.SATURATED
    assert classify(SoluteKind.ALCOHOL, 99) is Classification.CONCENTRATED
    assert classify(SoluteKind.ALCOHOL, 100) is Classification.SATURATED


def test_classify_is_repeatable() -> None:
    first = classify(SoluteKind.SUGAR, 40)
    for _ in range(5):
        assert classify(SoluteKind.SUGAR, 40) is first


def test_solute_missing_from_table_uses_default_ceiling() -> None:
    table = {SoluteKind.SALT: 36.0}
    assert saturation_threshold(SoluteKind.SUGAR, table) == DEFAULT_SATURATION
    assert classify(SoluteKind.SUGAR, 70, table) is Classification.CONCENTRATED
    assert classify(SoluteKind.SUGAR, 100, table) is Classification.SATURATED


def test_saturation_table_is_read_only() -> None:
    assert isinstance(SATURATION_TABLE, MappingProxyType)
    with pytest.raises(TypeError):
        SATURATION_TABLE[SoluteKind.SALT] = 1.0  # type: ignore[index]
    assert saturation_threshold(SoluteKind.SALT) == 36.0
