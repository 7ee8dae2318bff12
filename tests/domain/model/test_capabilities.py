from __future__ import annotations

import pytest

from devicebridge.domain.model import (
    Camera,
    Capability,
    CapabilityKind,
    Cellular,
    ComputerForm,
    Idiom,
    Screen,
    StylusGeneration,
    WatchCaseSize,
    capabilities_of_kind,
    explicit_capabilities,
    implied_capabilities,
    sorted_capabilities,
)

BATTERY = Capability.flag(CapabilityKind.BATTERY)


@pytest.mark.parametrize(
    ("capability", "text"),
    [
        (Capability.flag(CapabilityKind.USB_C), "usbC"),
        (Capability.cameras({Camera.WIDE, Camera.TELEPHOTO}), "cameras(telephoto,wide)"),
        (Capability.cellular(Cellular.FIVE_G), "cellular(fiveG)"),
        (Capability.pencils({StylusGeneration.USB_C}), "pencils(usbC)"),
        (Capability.computer_form(ComputerForm.MACBOOK_GEN2), "computerForm(macbook.gen2)"),
        (Capability.watch_size(WatchCaseSize.MM45), "watchSize(mm45)"),
        (Capability.screen(Screen(6.1, 1179, 2556, 460)), "screen(6.1,1179x2556,460)"),
    ],
)
def test_capability_text_round_trips(capability: Capability, text: str) -> None:
    assert capability.text == text
    assert Capability.parse(text) == capability


@pytest.mark.parametrize(
    "text",
    ["teleporter", "usbC(yes)", "cameras(wide", "cameras(wide,fisheye)", "biometrics(retina)"],
)
def test_capability_parse_returns_none_for_unknown_text(text: str) -> None:
    assert Capability.parse(text) is None


def test_capability_values_are_checked() -> None:
    with pytest.raises(ValueError, match="requires a value"):
        Capability(kind=CapabilityKind.CAMERAS)
    with pytest.raises(ValueError, match="does not take a value"):
        Capability(kind=CapabilityKind.USB_C, value="yes")


def test_implied_capabilities_by_idiom_and_form() -> None:
    assert implied_capabilities(Idiom.WATCH) == {
        BATTERY,
        Capability.flag(CapabilityKind.WIRELESS_CHARGING),
    }
    assert implied_capabilities(Idiom.TV) == frozenset()
    laptop = implied_capabilities(
        Idiom.COMPUTER, [Capability.computer_form(ComputerForm.MACBOOK_GEN2)]
    )
    assert Capability.flag(CapabilityKind.MAGSAFE_3) in laptop
    assert BATTERY in laptop


def test_explicit_capabilities_strip_implied_values() -> None:
    form = Capability.computer_form(ComputerForm.MAC_MINI)
    ethernet = Capability.flag(CapabilityKind.ETHERNET)
    thunderbolt = Capability.flag(CapabilityKind.THUNDERBOLT)

    assert explicit_capabilities(Idiom.COMPUTER, {form, ethernet, thunderbolt}) == {
        form,
        thunderbolt,
    }


def test_sorted_capabilities_follow_kind_order() -> None:
    cameras = Capability.cameras({Camera.WIDE})
    usb_c = Capability.flag(CapabilityKind.USB_C)
    battery = BATTERY

    assert sorted_capabilities({cameras, usb_c, battery}) == (battery, usb_c, cameras)
    assert capabilities_of_kind({cameras, usb_c}, CapabilityKind.CAMERAS) == (cameras,)
