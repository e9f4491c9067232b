from .json_location_directory import JsonLocationDirectory, get_location_directory

__all__ = ["JsonLocationDirectory", "get_location_directory"]
