"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

import re
from enum import StrEnum


class Idiom(StrEnum):
    """Closed category set; drives implicit capabilities."""

    PHONE = "phone"
    TABLET = "tablet"
    COMPUTER = "computer"
    TV = "tv"
    WATCH = "watch"
    MEDIA_PLAYER = "mediaPlayer"
    SPEAKER = "speaker"
    HEADSET = "headset"
    CAR_INTEGRATION = "car-integration"
    UNSPECIFIED = "unspecified"


class Processor(StrEnum):
    UNKNOWN = "unknown"
    # computers
    I3 = "i3"
    I5 = "i5"
    I7 = "i7"
    XEON_E5 = "xeonE5"
    M1 = "m1"
    M1_PRO = "m1pro"
    M1_MAX = "m1max"
    M1_ULTRA = "m1ultra"
    M2 = "m2"
    M2_PRO = "m2pro"
    M2_MAX = "m2max"
    M2_ULTRA = "m2ultra"
    M3 = "m3"
    M3_PRO = "m3pro"
    M3_MAX = "m3max"
    M3_ULTRA = "m3ultra"
    M4 = "m4"
    M4_PRO = "m4pro"
    M4_MAX = "m4max"
    # phones, tablets, media players, tvs
    A4 = "a4"
    A5 = "a5"
    A5X = "a5x"
    A6 = "a6"
    A6X = "a6x"
    A7 = "a7"
    A8 = "a8"
    A8X = "a8x"
    A9 = "a9"
    A9X = "a9x"
    A10 = "a10"
    A10X = "a10x"
    A11 = "a11"
    A12 = "a12"
    A12X = "a12x"
    A12Z = "a12z"
    A13 = "a13"
    A14 = "a14"
    A15 = "a15"
    A16 = "a16"
    A17_PRO = "a17pro"
    A18 = "a18"
    A18_PRO = "a18pro"
    # watches
    S1 = "s1"
    S1P = "s1p"
    S2 = "s2"
    S3 = "s3"
    S4 = "s4"
    S5 = "s5"
    S6 = "s6"
    S7 = "s7"
    S8 = "s8"
    S9 = "s9"
    S10 = "s10"

    @property
    def display_name(self) -> str:
        """Marketing style name, e.g. ``M1 Pro`` or ``A17 Pro``."""

        if self is Processor.UNKNOWN:
            return "Unknown"
        if self is Processor.XEON_E5:
            return "Xeon E5"
        text = self.value
        for suffix in ("pro", "max", "ultra"):
            if text.endswith(suffix) and len(text) > len(suffix):
                return f"{text[: -len(suffix)].upper()} {suffix.capitalize()}"
        return text.upper()

    @classmethod
    def find_in(cls, text: str) -> Processor:
        """Processor named in free ``text``; longer names win (``M3 Pro`` over ``M3``)."""

        lowered = text.lower()
        candidates = sorted(
            (processor for processor in cls if processor is not cls.UNKNOWN),
            key=lambda processor: len(processor.display_name),
            reverse=True,
        )
        for processor in candidates:
            pattern = rf"\b{re.escape(processor.display_name.lower())}\b"
            if re.search(pattern, lowered):
                return processor
        return cls.UNKNOWN


class Color(StrEnum):
    """Finish tags. ``DEFAULT`` marks "not specified"."""

    DEFAULT = "default"
    BLACK = "black"
    WHITE = "white"
    SILVER = "silver"
    SILVER_LIGHT = "silverLight"
    SPACE_GRAY = "spaceGray"
    SPACE_BLACK = "spaceBlack"
    GOLD = "gold"
    ROSE_GOLD = "roseGold"
    SKY_BLUE = "skyBlue"
    STARLIGHT = "starlight"
    MIDNIGHT = "midnight"
    BLUE = "blue"
    BLUE_DARK = "blueDark"
    GREEN = "green"
    GREEN_DARK = "greenDark"
    ORANGE = "orange"
    ORANGE_DARK = "orangeDark"
    PINK = "pink"
    PINK_DARK = "pinkDark"
    PURPLE = "purple"
    PURPLE_DARK = "purpleDark"
    YELLOW = "yellow"
    YELLOW_DARK = "yellowDark"
    RED = "red"


class CapabilityKind(StrEnum):
    # flags
    BATTERY = "battery"
    HEADPHONE_JACK = "headphoneJack"
    THIRTY_PIN = "thirtyPin"
    LIGHTNING = "lightning"
    USB_C = "usbC"
    MAGSAFE_1 = "magSafe1"
    MAGSAFE_2 = "magSafe2"
    MAGSAFE_3 = "magSafe3"
    THUNDERBOLT = "thunderbolt"
    ETHERNET = "ethernet"
    FORCE_3D_TOUCH = "force3DTouch"
    WIRELESS_CHARGING = "wirelessCharging"
    ESIM = "esim"
    NOTCH = "notch"
    DYNAMIC_ISLAND = "dynamicIsland"
    ALWAYS_ON_DISPLAY = "alwaysOnDisplay"
    ACTION_BUTTON = "actionButton"
    CAMERA_CONTROL = "cameraControl"
    INTELLIGENCE = "intelligence"
    LIDAR = "lidar"
    PRO = "pro"
    AIR = "air"
    MINI = "mini"
    PLUS = "plus"
    MAX = "max"
    # associated data
    CAMERAS = "cameras"
    CELLULAR = "cellular"
    SCREEN = "screen"
    BIOMETRICS = "biometrics"
    PENCILS = "pencils"
    COMPUTER_FORM = "computerForm"
    WATCH_SIZE = "watchSize"


class Camera(StrEnum):
    VGA = "vga"
    TWO_MP = "twoMP"
    THREE_MP = "threeMP"
    ISIGHT = "iSight"
    FACETIME_HD_720P = "faceTimeHD720p"
    FACETIME_HD_1080P = "faceTimeHD1080p"
    WIDE = "wide"
    TELEPHOTO = "telephoto"
    ULTRA_WIDE = "ultraWide"


class Cellular(StrEnum):
    NONE = "none"
    GPRS = "gprs"
    EDGE = "edge"
    THREE_G = "threeG"
    LTE = "lte"
    FIVE_G = "fiveG"


class Biometrics(StrEnum):
    NONE = "none"
    TOUCH_ID = "touchID"
    FACE_ID = "faceID"
    OPTIC_ID = "opticID"


class StylusGeneration(StrEnum):
    FIRST_GENERATION = "firstGeneration"
    SECOND_GENERATION = "secondGeneration"
    USB_C = "usbC"
    PRO = "pro"


class ComputerForm(StrEnum):
    MAC_PRO_GEN1 = "macpro.gen1"
    MAC_PRO_GEN2 = "macpro.gen2"
    MAC_PRO_GEN3 = "macpro.gen3"
    MACBOOK = "macbook"
    MACBOOK_GEN1 = "macbook.gen1"
    MACBOOK_GEN2 = "macbook.gen2"
    MAC_MINI = "macmini"
    MAC_STUDIO = "macstudio"
    IMAC = "imac"


class WatchCaseSize(StrEnum):
    MM38 = "mm38"
    MM40 = "mm40"
    MM41 = "mm41"
    MM42 = "mm42"
    MM44 = "mm44"
    MM45 = "mm45"
    MM46 = "mm46"
    MM49 = "mm49"

    @property
    def millimeters(self) -> int:
        return int(self.value[2:])
