from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from devicebridge.adapters.catalog import JsonCatalogStore
from devicebridge.domain.model import (
    Biometrics,
    CanonicalDevice,
    Capability,
    CapabilityKind,
    Color,
    ComputerForm,
    Idiom,
    IntroductionDate,
    OSVersionRange,
    Processor,
    Version,
)

if TYPE_CHECKING:
    from collections.abc import Callable

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "DEVICEBRIDGE_CATALOG_PATH",
        "DEVICEBRIDGE_MAX_WORKERS",
        "DEVICEBRIDGE_AUTO_ACCEPT",
        "DEVICEBRIDGE_LISTING_URL",
        "DEVICEBRIDGE_DEVICE_JSON_URL",
        "DEVICEBRIDGE_MAC_JSON_URL",
        "DEVICEBRIDGE_SUPPORT_PAGES_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DEVICEBRIDGE_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture(scope="session")
def read_fixture() -> Callable[[str], str]:
    def read(name: str) -> str:
        return (DATA_DIR / name).read_text(encoding="utf-8")

    return read


@pytest.fixture
def catalog_devices() -> list[CanonicalDevice]:
    return [
        CanonicalDevice(
            idiom=Idiom.PHONE,
            official_name="iPhone 15 Pro",
            identifiers=("iPhone16,1",),
            introduction=IntroductionDate(2023, 9, 22),
            support_reference="SP901",
            os_versions=OSVersionRange(launch=Version(17)),
            capabilities=frozenset(
                {
                    Capability.flag(CapabilityKind.DYNAMIC_ISLAND),
                    Capability.flag(CapabilityKind.ACTION_BUTTON),
                    Capability.flag(CapabilityKind.USB_C),
                    Capability.flag(CapabilityKind.PRO),
                    Capability.biometrics(Biometrics.FACE_ID),
                }
            ),
            model_numbers=("A2848", "A3101"),
            colors=(Color.BLACK, Color.WHITE),
            processor=Processor.A17_PRO,
        ),
        CanonicalDevice(
            idiom=Idiom.TV,
            official_name="Apple TV (3rd generation)",
            identifiers=("AppleTV3,1",),
            introduction=IntroductionDate(2012),
            model_numbers=("A1427",),
            processor=Processor.A5,
        ),
        CanonicalDevice(
            idiom=Idiom.TV,
            official_name="Apple TV (3rd generation) Rev A",
            identifiers=("AppleTV3,2",),
            introduction=IntroductionDate(2013),
            model_numbers=("A1469",),
            processor=Processor.A5,
        ),
        CanonicalDevice(
            idiom=Idiom.COMPUTER,
            official_name="MacBook Pro (14-inch, M3 Pro or M3 Max, Nov 2023)",
            identifiers=("Mac15,6",),
            introduction=IntroductionDate(2023, 11),
            capabilities=frozenset(
                {
                    Capability.computer_form(ComputerForm.MACBOOK_GEN2),
                    Capability.flag(CapabilityKind.PRO),
                    Capability.biometrics(Biometrics.TOUCH_ID),
                }
            ),
            model_numbers=("MRX33LL/A", "MRX63LL/A"),
            colors=(Color.SPACE_BLACK, Color.SILVER),
            processor=Processor.M3_PRO,
        ),
    ]


@pytest.fixture
def catalog_file(tmp_path: Path, catalog_devices: list[CanonicalDevice]) -> Path:
    path = tmp_path / "catalog.json"
    JsonCatalogStore(path).save(catalog_devices)
    return path
