"""Data model for the parsed header of a class file."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClassFileInfo:
    """Names and counts extracted from a structurally valid class file."""

    major_version: int
    minor_version: int
    access_flags: int
    this_class: str
    super_class: str | None
    interfaces: tuple[str, ...] = field(default_factory=tuple)
    field_count: int = 0
    method_count: int = 0

    @property
    def supertypes(self) -> tuple[str, ...]:
        """Return the superclass (if any) followed by the direct superinterfaces."""
        if self.super_class is None:
            return self.interfaces
        return (self.super_class, *self.interfaces)
