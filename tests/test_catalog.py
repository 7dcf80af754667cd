from dataclasses import replace

import pytest

from solutionlab.catalog import CHALLENGES, DEFAULT_SOLVENT, SOLVENTS, validate_catalog
from solutionlab.models import SoluteKind


def test_bundled_catalog_is_valid() -> None:
    validate_catalog(CHALLENGES)
    assert [challenge.id for challenge in CHALLENGES] == [1, 2, 3]
    assert [challenge.target_solute for challenge in CHALLENGES] == [
        SoluteKind.SALT,
        SoluteKind.SUGAR,
        SoluteKind.ALCOHOL,
    ]
    assert [challenge.target_concentration for challenge in CHALLENGES] == [5.0, 65.0, 15.0]
    assert all(challenge.tolerance_band == 2.0 for challenge in CHALLENGES)


def test_default_solvent_is_known() -> None:
    assert DEFAULT_SOLVENT in SOLVENTS
    assert "ethanol" in SOLVENTS


def test_empty_catalog_raises() -> None:
    with pytest.raises(ValueError, match="empty"):
        validate_catalog([])


def test_duplicate_id_raises() -> None:
    with pytest.raises(ValueError, match="Duplicate challenge id"):
        validate_catalog([CHALLENGES[0], replace(CHALLENGES[1], id=1)])


def test_out_of_order_ids_raise() -> None:
    with pytest.raises(ValueError, match="out of order"):
        validate_catalog([CHALLENGES[1], CHALLENGES[0]])


def test_non_positive_id_raises() -> None:
    with pytest.raises(ValueError, match="positive"):
        validate_catalog([replace(CHALLENGES[0], id=0)])


def test_bad_targets_raise() -> None:
    with pytest.raises(ValueError, match="no target solute"):
        validate_catalog([replace(CHALLENGES[0], target_solute=SoluteKind.NONE)])
    with pytest.raises(ValueError, match="outside 0-100"):
        validate_catalog([replace(CHALLENGES[0], target_concentration=120)])
    with pytest.raises(ValueError, match="negative tolerance"):
        validate_catalog([replace(CHALLENGES[0], tolerance_band=-1)])
