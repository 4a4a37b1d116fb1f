"""
CPU generation heuristics derived from the processor name.

These are approximations tied to Intel's historical model numbering (2xxx for
Sandy Bridge, 3xxx for Ivy Bridge, 4xxx and up for Haswell onwards). They are
not hardware capability checks. Callers use them as advisory feature-detection
signals, so they never raise and resolve anything unexpected to False.
"""

import re
from enum import IntEnum

VENDOR_MARKER = "Intel"

FOUR_DIGITS_RE = re.compile(r"([0-9]{4})")
TWO_DIGITS_RE = re.compile(r"([0-9]{2})")

# Core i3/i5/i7 with a four digit model number; the leading digit is the generation
CORE_MODEL_RE = re.compile(r"\bi[357]-([0-9])[0-9]{3}(?![0-9])")


class HardwareGeneration(IntEnum):
    """Quick Sync hardware generation, ordered oldest to newest."""

    G0 = 0  # third party hardware
    G1 = 1  # Sandy Bridge or equivalent
    G2 = 2  # Ivy Bridge or equivalent
    G3 = 3  # Haswell or equivalent

    @property
    def label(self) -> str:
        return GENERATION_LABELS[self]


GENERATION_LABELS: dict[HardwareGeneration, str] = {
    HardwareGeneration.G0: "third party hardware",
    HardwareGeneration.G1: "Sandy Bridge or equivalent",
    HardwareGeneration.G2: "Ivy Bridge or equivalent",
    HardwareGeneration.G3: "Haswell or equivalent",
}

# Leading model digit of the Core generations older than Haswell
LEGACY_CORE_GENERATIONS: dict[str, HardwareGeneration] = {
    "2": HardwareGeneration.G1,
    "3": HardwareGeneration.G2,
}


def first_number(identity: str, pattern: re.Pattern[str]) -> int | None:
    """Parse the first match of a digit pattern, or None if there is no match."""
    match = pattern.search(identity)
    if match is None:
        return None
    return int(match.group(0))


def is_intel(identity: str | None) -> bool:
    return identity is not None and VENDOR_MARKER in identity


def is_recent_generation(identity: str | None) -> bool:
    """
    Check whether the processor looks like Haswell or newer.

    Takes the first run of four digits in the name and tests it against
    4000 (strictly greater).
    """
    if not is_intel(identity):
        return False

    model_number = first_number(identity, FOUR_DIGITS_RE)
    return model_number is not None and model_number > 4000


def is_mid_generation(identity: str | None) -> bool:
    """
    Check whether the processor looks like Sandy Bridge.

    Takes the first two consecutive digits in the name, wherever they occur,
    and tests 2000 < n < 3000. The two-digit match lands on the leading
    digits of a longer model number ("2500" scans as 25), so in practice
    this is False for real model names. Kept as-is for parity with existing
    callers; see open question 2 in DESIGN.md.
    """
    if not is_intel(identity):
        return False

    model_number = first_number(identity, TWO_DIGITS_RE)
    return model_number is not None and 2000 < model_number < 3000


def processor_generation(identity: str | None) -> HardwareGeneration:
    """
    Map a processor name to a Quick Sync hardware generation.

    Only Sandy Bridge (Core i3/i5/i7 2xxx) and Ivy Bridge (3xxx) are mapped
    to older generations. Anything else from Intel, including Xeons and
    five digit model numbers, is assumed to be Haswell or newer.
    """
    if not is_intel(identity):
        return HardwareGeneration.G0

    match = CORE_MODEL_RE.search(identity)
    if match is not None and match.group(1) in LEGACY_CORE_GENERATIONS:
        return LEGACY_CORE_GENERATIONS[match.group(1)]
    return HardwareGeneration.G3
