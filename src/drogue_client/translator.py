"""Typed access to the ``spec`` and ``status`` sections of a resource.

Resources carry their configuration and state as untyped JSON maps. A
*dialect* is a pydantic model bound to one key in one of those maps:

.. code-block:: python

    @dialect(Section.SPEC, "core")
    class DeviceSpecCore(Dialect, DrogueModel):
        disabled: bool = False

    match device.section(DeviceSpecCore):
        case Decoded(core):
            print(core.disabled)
        case Malformed(error):
            print("invalid section", error)
        case None:
            print("no core section")

Decoding happens on every access, nothing is cached. Absence and a
malformed section are reported separately, neither raises.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, Union

from pydantic import TypeAdapter
from pydantic_core import PydanticSerializationError

from drogue_client.errors.translator import SectionDecodeError, SectionEncodeError

if TYPE_CHECKING:
    from typing_extensions import Self

    from drogue_client.utils.api_types import SectionMap

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")
D = TypeVar("D", bound="Dialect")
R = TypeVar("R")


class Section(enum.Enum):
    """The two maps of a resource which hold dialects."""

    SPEC = "spec"
    STATUS = "status"


@dataclass(frozen=True)
class Decoded(Generic[T]):
    """The section is present and was decoded."""

    __match_args__ = ("value",)

    value: T


@dataclass(frozen=True)
class Malformed:
    """The section is present, but could not be decoded."""

    __match_args__ = ("error",)

    error: SectionDecodeError


SectionResult = Union[Decoded[T], Malformed, None]
"""Outcome of a section lookup, ``None`` when the section is absent."""


class Dialect:
    """Mixin for typed views of a section, bind them to a key with :py:func:`dialect`.

    The default codec is the pydantic one, subclasses whose JSON shape
    cannot be expressed as a plain model override the classmethods.
    """

    @classmethod
    def from_section_value(cls, value: Any) -> Self:  # noqa: ANN401
        """Decodes the raw JSON value of the section."""
        return cls.model_validate(value)  # type: ignore[attr-defined]

    def to_section_value(self) -> Any:  # noqa: ANN401
        """Encodes this value into its raw JSON form."""
        return self.model_dump(mode="json", by_alias=True, exclude_defaults=True)  # type: ignore[attr-defined]

    @classmethod
    def default_value(cls) -> Self:
        """The value :py:meth:`Translator.update_section` starts from, when the section is absent."""
        return cls()


def dialect(section: Section, key: str) -> Callable[[type[D]], type[D]]:
    """Class decorator, binding a :py:class:`Dialect` to a key in the spec or status section."""

    def decorator(cls: type[D]) -> type[D]:
        if not issubclass(cls, Dialect):
            msg = f"{cls.__name__} must inherit from Dialect to be bound to {section.value}.{key}"
            raise TypeError(msg)
        cls.__dialect__ = (section, key)
        return cls

    return decorator


def dialect_of(cls: type[Dialect]) -> tuple[Section, str]:
    """Returns the section and key a dialect is bound to."""
    try:
        return cls.__dialect__
    except AttributeError:
        msg = f"{cls.__name__} is not bound to a section, use the @dialect decorator"
        raise TypeError(msg) from None


class Attribute(Generic[D, R]):
    """A value derived from one dialect, total over all three lookup outcomes."""

    def __init__(self, dialect_type: type[D], extract: Callable[[SectionResult[D]], R]) -> None:
        self.dialect = dialect_type
        self.extract = extract
        self.__doc__ = extract.__doc__
        self.__name__ = extract.__name__

    def __repr__(self) -> str:
        return f"<Attribute {self.__name__} of {self.dialect.__name__}>"


def attribute(dialect_type: type[D]) -> Callable[[Callable[[SectionResult[D]], R]], Attribute[D, R]]:
    """Decorator turning an extraction function into an :py:class:`Attribute`.

    .. code-block:: python

        @attribute(DeviceSpecCore)
        def device_enabled(outcome: SectionResult[DeviceSpecCore]) -> bool:
            ...

        device.attribute(device_enabled)
    """

    def decorator(extract: Callable[[SectionResult[D]], R]) -> Attribute[D, R]:
        return Attribute(dialect_type, extract)

    return decorator


def _is_dialect(target: Any) -> bool:  # noqa: ANN401
    try:
        return issubclass(target, Dialect)
    except TypeError:
        # generic aliases like list[str]
        return False


def _decode(section: Section, key: str, target: Any, value: Any) -> SectionResult:  # noqa: ANN401
    try:
        if _is_dialect(target):
            decoded = target.from_section_value(value)
        else:
            decoded = TypeAdapter(target).validate_python(value)
    except (ValueError, TypeError) as e:
        name = getattr(target, "__name__", repr(target))
        LOGGER.debug("Failed to decode %s.%s as %s", section.value, key, name, exc_info=True)
        error = SectionDecodeError(section.value, key, name, str(e))
        error.__cause__ = e
        return Malformed(error)
    return Decoded(decoded)


class Translator:
    """Mixin for resources with ``spec`` and ``status`` maps.

    Implementations need to provide the ``spec`` and ``status`` attributes.
    """

    def _section_map(self, section: Section) -> SectionMap:
        return self.spec if section is Section.SPEC else self.status

    def section(self, dialect_type: type[D]) -> SectionResult[D]:
        """Looks up and decodes the section of the dialect.

        Returns:
            :py:class:`Decoded` with the value, :py:class:`Malformed` with the decode error
            or ``None`` when the section is not present
        """
        section, key = dialect_of(dialect_type)
        return self._lookup(section, key, dialect_type)

    def _lookup(self, section: Section, key: str, target: Any) -> SectionResult:  # noqa: ANN401
        sections = self._section_map(section)
        if key not in sections:
            return None
        return _decode(section, key, target, sections[key])

    def spec_for(self, key: str, target: type[T] | Any) -> SectionResult[T]:  # noqa: ANN401
        """Looks up ``spec[key]`` and decodes it as ``target``, any type pydantic can validate."""
        return self._lookup(Section.SPEC, key, target)

    def status_for(self, key: str, target: type[T] | Any) -> SectionResult[T]:  # noqa: ANN401
        """Looks up ``status[key]`` and decodes it as ``target``, any type pydantic can validate."""
        return self._lookup(Section.STATUS, key, target)

    def set_section(self, value: Dialect) -> None:
        """Encodes the value and stores it under the key of its dialect, replacing what was there.

        Raises:
            SectionEncodeError: if the value can't be encoded
        """
        section, key = dialect_of(type(value))
        try:
            encoded = value.to_section_value()
        except (PydanticSerializationError, ValueError, TypeError) as e:
            raise SectionEncodeError(section.value, key, str(e)) from e
        self._section_map(section)[key] = encoded

    def update_section(self, dialect_type: type[D], f: Callable[[D], D]) -> None:
        """Read-modify-write of a section.

        When the section is absent, ``f`` receives the dialect's default value.

        Raises:
            SectionDecodeError: if the present section can't be decoded, ``f`` is not called
            SectionEncodeError: if the value returned by ``f`` can't be encoded
        """
        outcome = self.section(dialect_type)
        if outcome is None:
            current = dialect_type.default_value()
        elif isinstance(outcome, Malformed):
            raise outcome.error
        else:
            current = outcome.value
        self.set_section(f(current))

    def clear_section(self, dialect_type: type[Dialect]) -> None:
        """Removes the section of the dialect, if present."""
        section, key = dialect_of(dialect_type)
        self._section_map(section).pop(key, None)

    def attribute(self, attr: Attribute[D, R]) -> R:
        """Computes the attribute from the current section of its dialect."""
        return attr.extract(self.section(attr.dialect))
