import math

import pytest

from optica.domain import EyeMeasurement, Prescription
from optica.services.lens_quote import (
    complexity,
    normalize_prescription,
    normalize_value,
    sort_eyes_by_complexity,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (2.12, 2.0),
        (2.13, 2.25),
        (2.125, 2.25),
        (-2.125, -2.25),
        (-3.76, -3.75),
        (0, 0.0),
        (1.37, 1.25),
        (-0.875, -1.0),
        (6.0, 6.0),
    ],
)
def test_normalize_value_rounds_half_away_from_zero(raw, expected):
    assert normalize_value(raw) == expected


def test_normalize_value_is_idempotent():
    for raw in (-7.3, -2.125, -0.01, 0.13, 0.375, 3.999, 12.62):
        once = normalize_value(raw)
        assert normalize_value(once) == once


@pytest.mark.parametrize("raw", [1e30, -1e30, 2.5e27, 1.7976931348623157e308])
def test_normalize_value_handles_huge_magnitudes(raw):
    assert normalize_value(raw) == raw


def test_normalize_value_never_returns_negative_zero():
    assert math.copysign(1.0, normalize_value(-0.1)) == 1.0


def test_normalize_prescription_keeps_original_untouched():
    original = Prescription(
        od=EyeMeasurement(sphere=-2.13, cylinder=-0.6),
        oi=EyeMeasurement(sphere=1.12, cylinder=0.0),
    )
    normalized = normalize_prescription(original)

    assert normalized.od == EyeMeasurement(sphere=-2.25, cylinder=-0.5)
    assert normalized.oi == EyeMeasurement(sphere=1.0, cylinder=0.0)
    assert original.od.sphere == -2.13


def test_complexity_sums_magnitudes():
    assert complexity(EyeMeasurement(sphere=-3.0, cylinder=1.5)) == 4.5


def test_sort_eyes_puts_less_complex_eye_first_as_magnitudes():
    prescription = Prescription(
        od=EyeMeasurement(sphere=-5.0, cylinder=-1.0),
        oi=EyeMeasurement(sphere=2.0, cylinder=-0.5),
    )
    oriented = sort_eyes_by_complexity(prescription)

    assert oriented.min_eye == EyeMeasurement(sphere=2.0, cylinder=0.5)
    assert oriented.max_eye == EyeMeasurement(sphere=5.0, cylinder=1.0)


def test_sort_eyes_right_eye_wins_ties():
    prescription = Prescription(
        od=EyeMeasurement(sphere=-1.0, cylinder=-3.0),
        oi=EyeMeasurement(sphere=3.0, cylinder=1.0),
    )
    oriented = sort_eyes_by_complexity(prescription)

    assert oriented.min_eye == EyeMeasurement(sphere=1.0, cylinder=3.0)
    assert oriented.max_eye == EyeMeasurement(sphere=3.0, cylinder=1.0)


def test_sort_eyes_is_symmetric_under_swap():
    a = EyeMeasurement(sphere=-4.0, cylinder=-2.0)
    b = EyeMeasurement(sphere=1.5, cylinder=-0.25)

    assert sort_eyes_by_complexity(Prescription(od=a, oi=b)) == sort_eyes_by_complexity(
        Prescription(od=b, oi=a)
    )
