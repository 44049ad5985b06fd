import pytest

from parking_lot.domain.validation import is_valid_plate, normalize_plate


@pytest.mark.parametrize("plate", ["TN07CV7077", "KA01A1234", "tn07cv7077", "mh12ab0001"])
def test_valid_plates(plate):
    assert is_valid_plate(plate)


@pytest.mark.parametrize(
    "plate",
    ["", None, " TN07CV7077 ", "TN07CV7077\n", "TN07CVX7077", "T07CV7077", "TN7CV7077", "TN07CV777", "TN07CV77777", "TN-07-CV-7077", "1N07CV7077"],
)
def test_invalid_plates(plate):
    assert not is_valid_plate(plate)


def test_normalize_plate():
    assert normalize_plate("tn07cv7077") == "TN07CV7077"
    assert normalize_plate(" tn07cv7077 ") == " TN07CV7077 "
    assert normalize_plate(None) == ""
