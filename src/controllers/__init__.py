from .lighting_controller import LightingController

__all__ = [
    'LightingController',
]
