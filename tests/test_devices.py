"""Tests for the device catalogue."""

from chronos_wallpaper.devices import (
    DEVICE_MODELS,
    get_all_brands,
    get_device_by_model,
    get_devices_by_brand,
)


class TestDeviceCatalogue:
    def test_lookup_is_case_insensitive(self):
        device = get_device_by_model("  iphone 15 PRO ")
        assert device is not None
        assert (device.width, device.height) == (1179, 2556)

    def test_unknown_model(self):
        assert get_device_by_model("Nokia 3310") is None

    def test_brands_in_catalogue_order(self):
        brands = get_all_brands()
        assert brands[0] == "Apple"
        assert len(brands) == len(set(brands))
        assert {"Samsung", "Google"} <= set(brands)

    def test_devices_by_brand(self):
        pixels = get_devices_by_brand("Google")
        assert pixels
        assert all(d.brand == "Google" for d in pixels)

    def test_all_portrait(self):
        assert all(d.height > d.width > 0 for d in DEVICE_MODELS)

    def test_model_names_unique(self):
        names = [d.model.lower() for d in DEVICE_MODELS]
        assert len(names) == len(set(names))
