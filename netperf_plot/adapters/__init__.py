from .records import load_devices, series_from_records

__all__ = ["load_devices", "series_from_records"]
