"""Catalogue of popular phones and their native screen resolutions.

Lets a configuration name a device ("iPhone 15 Pro") instead of spelling
out pixel dimensions. Newest models first within each brand.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DeviceModel:
    brand: str
    model: str
    width: int
    height: int


DEVICE_MODELS: tuple[DeviceModel, ...] = (
    DeviceModel("Apple", "iPhone 16 Pro Max", 1320, 2868),
    DeviceModel("Apple", "iPhone 16 Pro", 1206, 2622),
    DeviceModel("Apple", "iPhone 16 Plus", 1290, 2796),
    DeviceModel("Apple", "iPhone 16", 1179, 2556),
    DeviceModel("Apple", "iPhone 15 Pro Max", 1290, 2796),
    DeviceModel("Apple", "iPhone 15 Pro", 1179, 2556),
    DeviceModel("Apple", "iPhone 15 Plus", 1290, 2796),
    DeviceModel("Apple", "iPhone 15", 1179, 2556),
    DeviceModel("Apple", "iPhone 14 Pro Max", 1290, 2796),
    DeviceModel("Apple", "iPhone 14 Pro", 1179, 2556),
    DeviceModel("Apple", "iPhone 14 Plus", 1284, 2778),
    DeviceModel("Apple", "iPhone 14", 1170, 2532),
    DeviceModel("Apple", "iPhone 13 Pro Max", 1284, 2778),
    DeviceModel("Apple", "iPhone 13 Pro", 1170, 2532),
    DeviceModel("Apple", "iPhone 13", 1170, 2532),
    DeviceModel("Apple", "iPhone 12 Pro Max", 1284, 2778),
    DeviceModel("Apple", "iPhone 12 Pro", 1170, 2532),
    DeviceModel("Apple", "iPhone 12", 1170, 2532),

    DeviceModel("Samsung", "Galaxy S24 Ultra", 1440, 3120),
    DeviceModel("Samsung", "Galaxy S24+", 1440, 3120),
    DeviceModel("Samsung", "Galaxy S24", 1080, 2340),
    DeviceModel("Samsung", "Galaxy S23 Ultra", 1440, 3088),
    DeviceModel("Samsung", "Galaxy S23+", 1080, 2340),
    DeviceModel("Samsung", "Galaxy S23", 1080, 2340),
    DeviceModel("Samsung", "Galaxy S22 Ultra", 1440, 3088),
    DeviceModel("Samsung", "Galaxy S22+", 1080, 2340),
    DeviceModel("Samsung", "Galaxy S22", 1080, 2340),
    DeviceModel("Samsung", "Galaxy S21 Ultra", 1440, 3200),
    DeviceModel("Samsung", "Galaxy S21+", 1080, 2400),
    DeviceModel("Samsung", "Galaxy S21", 1080, 2400),
    DeviceModel("Samsung", "Galaxy S20 Ultra", 1440, 3200),

    DeviceModel("Google", "Pixel 9 Pro XL", 1344, 2992),
    DeviceModel("Google", "Pixel 9 Pro", 1280, 2856),
    DeviceModel("Google", "Pixel 9", 1080, 2424),
    DeviceModel("Google", "Pixel 8 Pro", 1344, 2992),
    DeviceModel("Google", "Pixel 8", 1080, 2400),
    DeviceModel("Google", "Pixel 7 Pro", 1440, 3120),
    DeviceModel("Google", "Pixel 7", 1080, 2400),
    DeviceModel("Google", "Pixel 6 Pro", 1440, 3120),
    DeviceModel("Google", "Pixel 6", 1080, 2400),

    DeviceModel("OnePlus", "OnePlus 12", 1440, 3168),
    DeviceModel("OnePlus", "OnePlus 11", 1440, 3216),
    DeviceModel("OnePlus", "OnePlus 10 Pro", 1440, 3216),
    DeviceModel("OnePlus", "OnePlus 9 Pro", 1440, 3216),

    DeviceModel("Xiaomi", "Xiaomi 14 Pro", 1440, 3200),
    DeviceModel("Xiaomi", "Xiaomi 14", 1200, 2670),
    DeviceModel("Xiaomi", "Xiaomi 13 Pro", 1440, 3200),
    DeviceModel("Xiaomi", "Xiaomi 13", 1080, 2400),
    DeviceModel("Xiaomi", "Xiaomi 12 Pro", 1440, 3200),
)

_BY_MODEL = {device.model.lower(): device for device in DEVICE_MODELS}


def get_device_by_model(model_name: str) -> DeviceModel | None:
    """Case-insensitive lookup by exact model name."""
    return _BY_MODEL.get(model_name.strip().lower())


def get_all_brands() -> list[str]:
    """Unique brand names in catalogue order."""
    return list(dict.fromkeys(device.brand for device in DEVICE_MODELS))


def get_devices_by_brand(brand: str) -> list[DeviceModel]:
    return [device for device in DEVICE_MODELS if device.brand == brand]
