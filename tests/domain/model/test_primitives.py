from __future__ import annotations

import pytest

from devicebridge.domain.model import (
    IntroductionDate,
    Processor,
    Screen,
    Version,
    identifier_version,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("17", Version(17)),
        ("17.2", Version(17, 2)),
        (" 9.3.6 ", Version(9, 3, 6)),
        ("1.2.3.4", Version.ZERO),
        ("seventeen", Version.ZERO),
        ("-1", Version.ZERO),
        ("", Version.ZERO),
        (None, Version.ZERO),
    ],
)
def test_version_parse_is_total(text: str | None, expected: Version) -> None:
    assert Version.parse(text) == expected


def test_version_text_drops_trailing_zeroes() -> None:
    assert str(Version(17)) == "17"
    assert str(Version(17, 2)) == "17.2"
    assert str(Version(9, 0, 1)) == "9.0.1"
    assert Version(16, 7).next_major() == Version(17)
    assert Version(16, 7) < Version(17)


def test_identifier_version() -> None:
    assert identifier_version("iPad16,3") == Version(16, 3)
    assert identifier_version("AppleTV3,2") == Version(3, 2)
    assert identifier_version("i386") == Version.ZERO


def test_introduction_date_parse() -> None:
    year_only = IntroductionDate.parse("2019")
    full = IntroductionDate.parse("2019-09-20")

    assert year_only == IntroductionDate(2019)
    assert year_only is not None
    assert year_only.is_year_only
    assert full == IntroductionDate(2019, 9, 20)
    assert str(full) == "2019-09-20"
    assert str(IntroductionDate(2021, 4)) == "2021-04"
    assert IntroductionDate.parse(2012) == IntroductionDate(2012)


@pytest.mark.parametrize("text", ["2019-13", "2019-02-30", "soon", "", None])
def test_introduction_date_parse_rejects_invalid(text: str | None) -> None:
    assert IntroductionDate.parse(text) is None


def test_screen_text_round_trips() -> None:
    screen = Screen(diagonal=6.1, width=1179, height=2556, ppi=460)

    assert str(screen) == "6.1,1179x2556,460"
    assert Screen.parse(str(screen)) == screen
    assert Screen.parse("6.1,wide,460") is None


def test_processor_display_names() -> None:
    assert Processor.M1_PRO.display_name == "M1 Pro"
    assert Processor.A17_PRO.display_name == "A17 Pro"
    assert Processor.M2_ULTRA.display_name == "M2 Ultra"
    assert Processor.A5X.display_name == "A5X"
    assert Processor.XEON_E5.display_name == "Xeon E5"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("MacBook Pro (14-inch, M3 Pro or M3 Max, Nov 2023)", Processor.M3_PRO),
        ("iPad mini (A17 Pro)", Processor.A17_PRO),
        ("Apple M3 chip", Processor.M3),
        ("A11 Bionic", Processor.A11),
        ("iPhone 15", Processor.UNKNOWN),
    ],
)
def test_processor_find_in_prefers_longest_name(text: str, expected: Processor) -> None:
    assert Processor.find_in(text) is expected
