"""Implementation of the command API, sending commands to devices."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from drogue_client.clients.api_client import APIClient

if TYPE_CHECKING:
    from drogue_client.utils.api_types import ApplicationName, DeviceName


class CommandClient(APIClient):
    """CommandClient class that implements methods from the 'api/command/v1alpha1' API."""

    api_name = "command"

    def publish_command(
        self,
        application: ApplicationName,
        device: DeviceName,
        command: str,
        payload: Any = None,  # noqa: ANN401
        **kwargs,
    ) -> None:
        """Sends a command to a device, the command is delivered asynchronously.

        Args:
            application: the application of the device
            device: the device name
            command: the name of the command
            payload: JSON payload of the command, pydantic models are serialized
            kwargs: gets passed to :py:meth:`APIClient.api_request`
        """
        self.create(
            self.api_url("apps", application, "devices", device),
            payload,
            params={"command": command},
            **kwargs,
        )
