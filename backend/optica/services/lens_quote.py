"""Prescription normalization and eye ordering used by lens quotes."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

from ..domain import EyeMeasurement, OrientedPrescription, Prescription

_QUARTERS = Decimal("4")


def normalize_value(value: float) -> float:
    """Snap ``value`` to the nearest 0.25 diopter, halves away from zero.

    Goes through ``Decimal(str(value))`` so that inputs such as 2.125 land on
    the exact midpoint instead of a binary approximation of it.
    """
    quarters = (Decimal(str(value)) * _QUARTERS).to_integral_value(rounding=ROUND_HALF_UP)
    # + 0.0 folds -0.0 into 0.0
    return float(quarters / _QUARTERS) + 0.0


def normalize_eye(eye: EyeMeasurement) -> EyeMeasurement:
    return EyeMeasurement(
        sphere=normalize_value(eye.sphere),
        cylinder=normalize_value(eye.cylinder),
    )


def normalize_prescription(prescription: Prescription) -> Prescription:
    return Prescription(od=normalize_eye(prescription.od), oi=normalize_eye(prescription.oi))


def complexity(eye: EyeMeasurement) -> float:
    return abs(eye.sphere) + abs(eye.cylinder)


def _magnitudes(eye: EyeMeasurement) -> EyeMeasurement:
    return EyeMeasurement(sphere=abs(eye.sphere), cylinder=abs(eye.cylinder))


def sort_eyes_by_complexity(prescription: Prescription) -> OrientedPrescription:
    """Order the eyes so range lookups do not depend on left versus right.

    The right eye (od) is the min eye when both are equally complex.
    """
    od, oi = prescription.od, prescription.oi
    if complexity(od) <= complexity(oi):
        return OrientedPrescription(min_eye=_magnitudes(od), max_eye=_magnitudes(oi))
    return OrientedPrescription(min_eye=_magnitudes(oi), max_eye=_magnitudes(od))
