from .state import MapState, SCHEMA_VERSION

__all__ = ["MapState", "SCHEMA_VERSION"]
