import re
from typing import Optional

# e.g. TN07CV7077 or KA01A1234
PLATE_REGEX = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z]{1,2}[0-9]{4}$")


def normalize_plate(plate: Optional[str]) -> str:
    return (plate or "").upper()


def is_valid_plate(plate: Optional[str]) -> bool:
    if not plate:
        return False
    return PLATE_REGEX.fullmatch(normalize_plate(plate)) is not None
