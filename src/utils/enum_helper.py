"""Enum conversion utilities"""

import re
from enum import Enum
from typing import TypeVar, Type, Optional, List, Any

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Utility class for working with Enums:
    - Parse user facing names back to enum members
    - List all member names
    """

    @staticmethod
    def normalize_name(name: str) -> str:
        """
        Turn a user supplied identifier into an enum member name.

        'gradient-wave', 'gradient wave', 'gradientWave' -> 'GRADIENT_WAVE'
        """
        name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip())
        return re.sub(r"[\s\-]+", "_", name).upper()

    @staticmethod
    def from_string(enum_class: Type[E], name: str, default: Optional[E] = None) -> E:
        """
        Parse string to Enum member (case and separator insensitive).

        Args:
            enum_class: Enum class to parse into
            name: Member name
            default: Return value if not found (None = raise)

        Raises:
            ValueError: If name matches no member and no default was given
        """
        if not issubclass(enum_class, Enum):
            raise TypeError(f"{enum_class} is not an Enum class")

        key = EnumHelper.normalize_name(name)
        member = enum_class.__members__.get(key)
        if member is not None:
            return member

        if default is not None:
            return default
        raise ValueError(f"Invalid {enum_class.__name__} name: {name}")

    @staticmethod
    def to_enum(enum_class: Type[E], value: Any) -> E:
        """Convert string or member to enum instance"""
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            return EnumHelper.from_string(enum_class, value)
        raise TypeError(f"Expected str or {enum_class.__name__}, got {type(value)}")

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        if lowercase:
            return [member.name.lower() for member in enum_class]
        return [member.name for member in enum_class]
