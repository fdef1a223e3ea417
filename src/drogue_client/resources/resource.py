"""Base class of the registry resources, carrying untyped spec and status sections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from drogue_client.translator import Translator
from drogue_client.utils.serde import DrogueModel

if TYPE_CHECKING:
    from typing_extensions import Self


class Resource(Translator, DrogueModel):
    """A registry resource.

    The ``spec`` and ``status`` sections are kept as plain JSON maps,
    typed access goes through :py:meth:`~drogue_client.translator.Translator.section`
    and the other :py:class:`~drogue_client.translator.Translator` methods.
    """

    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> Self:  # noqa: ANN401
        """Creates the resource from its JSON representation, as returned by the API."""
        return cls.model_validate(data)
